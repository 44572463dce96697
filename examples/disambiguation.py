"""
Demo script for acronyms with several meanings.

Shows the three ways an ambiguous acronym can be handled and the
diagnostic output explaining every omitted candidate.
"""

from legal_expand import expand_acronyms, expand_acronyms_detailed, find_acronym


def main():
    for acronym in ["CE", "DGT", "cfr."]:
        result = find_acronym(acronym)
        print(f"{result.acronym}: {' | '.join(result.meanings)}")

    text = "Conforme a la CE, la DGT dictó resolución."

    print("\n" + "=" * 80)
    print(f"Input: {text}")
    print("=" * 80)
    print(f"\nUnresolved (default): {expand_acronyms(text)}")
    print(f"\nAuto-resolved:        {expand_acronyms(text, auto_resolve_duplicates=True)}")
    manual = expand_acronyms(
        text,
        auto_resolve_duplicates=True,
        duplicate_resolution={"DGT": "Dirección General de Tráfico"},
    )
    print(f"\nManual for DGT:       {manual}")

    print("\n" + "=" * 80)
    print("Diagnostics")
    print("=" * 80)
    detailed = expand_acronyms_detailed(
        "La CE y la AEAT (ver `AEAT` en https://aeat.es); otra vez la AEAT.",
        expand_only_first=True,
    )
    print(f"\n{detailed.expanded_text}\n")
    for omitted in detailed.omitted_acronyms:
        print(f"  [{omitted.start:3d}:{omitted.end:3d}] {omitted.acronym:6s} {omitted.reason}")
        if omitted.details:
            print(f"               {omitted.details}")


if __name__ == "__main__":
    main()
