"""
Performance benchmarks for legal-expand.
"""

import time
import statistics
from typing import Tuple

from legal_expand import expand_acronyms, load_dictionary, AcronymMatcher


def benchmark(func, iterations: int = 1000) -> Tuple[float, float, float]:
    """
    Run a benchmark and return timing statistics.

    Returns:
        (mean_ms, min_ms, max_ms)
    """
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)  # Convert to ms

    return (
        statistics.mean(times),
        min(times),
        max(times)
    )


def run_benchmarks():
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("legal-expand Benchmarks")
    print("=" * 60)
    print()

    print("Startup (compile dictionary + build matcher):")
    print("-" * 60)
    mean, min_t, max_t = benchmark(
        lambda: AcronymMatcher(dictionary=load_dictionary(force_reload=True)),
        iterations=20
    )
    print(f"  {'Cold start':30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    # Warm the process-wide matcher
    expand_acronyms("AEAT")

    test_cases = [
        ("Short sentence", "La AEAT gestiona el IVA"),
        ("Ambiguous acronym", "Según la CE y la DGT"),
        ("Dotted forms", "Conforme al art. 5 de la LECrim. y la A.E.A.T."),
        ("Protected contexts", "Ver https://www.boe.es/BOE y `AEAT` o info@aeat.es"),
        ("No acronyms", "Texto corriente sin ninguna abreviatura conocida."),
    ]

    print()
    print("Plain expansion:")
    print("-" * 60)

    for name, text in test_cases:
        mean, min_t, max_t = benchmark(
            lambda s=text: expand_acronyms(s),
            iterations=1000
        )
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Structured output with auto-resolution:")
    print("-" * 60)

    for name, text in test_cases[:3]:
        mean, min_t, max_t = benchmark(
            lambda s=text: expand_acronyms(s, format='structured', auto_resolve_duplicates=True),
            iterations=500
        )
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Throughput test (long document):")
    print("-" * 60)

    paragraph = (
        "La AEAT, conforme al art. 5 de la LGT y la STS de 3 de marzo, "
        "publicó en el BOE la resolución sobre el IVA y el IRPF. "
    )
    document = paragraph * 200

    start = time.perf_counter()
    for _ in range(20):
        expand_acronyms(document)
    total = time.perf_counter() - start

    chars = len(document) * 20
    print(f"  Document size: {len(document)} characters")
    print(f"  Throughput: {chars / total / 1000:.0f}k characters/second")
    print(f"  Total time: {total:.3f}s for 20 documents")

    print()
    print("=" * 60)


if __name__ == "__main__":
    run_benchmarks()
