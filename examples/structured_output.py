"""
Demo script for structured and HTML output, plus dictionary exports.
"""

from pathlib import Path
import tempfile

from legal_expand import dictionary_stats, expand_acronyms, load_dictionary
from legal_expand.reports import export_excel, export_listing


def main():
    text = "La AEAT aplica la LGT y el RGPD."

    print("=" * 80)
    print("  Structured output (JSON)")
    print("=" * 80)
    print(expand_acronyms(text, format='structured').to_json())

    print("\n" + "=" * 80)
    print("  HTML output")
    print("=" * 80)
    print(expand_acronyms(text, format='html'))

    stats = dictionary_stats()
    print("\n" + "=" * 80)
    print("  Dictionary")
    print("=" * 80)
    print(f"Acronyms:               {stats.total_acronyms}")
    print(f"With several meanings:  {stats.acronyms_with_duplicates}")
    print(f"With punctuation:       {stats.acronyms_with_punctuation}")

    out_dir = Path(tempfile.mkdtemp(prefix="legal_expand_"))
    dictionary = load_dictionary()
    print(f"\nListing: {export_listing(dictionary, out_dir / 'siglas.txt')}")
    print(f"Excel:   {export_excel(dictionary, out_dir / 'siglas.xlsx')}")


if __name__ == "__main__":
    main()
