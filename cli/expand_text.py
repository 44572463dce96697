#!/usr/bin/env python3
"""
Simple CLI for expanding Spanish legal acronyms.

Usage:
    python expand_text.py "La AEAT publica en el BOE"

Output:
    La AEAT (Agencia Estatal de Administración Tributaria) publica en el BOE (Boletín Oficial del Estado)
"""

import sys
import json
from pathlib import Path

# Add parent directory to path to import legal_expand
sys.path.insert(0, str(Path(__file__).parent.parent))

from legal_expand import expand_acronyms, DictionaryError


def main():
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python expand_text.py <text>")
        print("\nExample:")
        print('  python expand_text.py "La AEAT publica en el BOE"')
        sys.exit(1)

    text = " ".join(sys.argv[1:])

    try:
        print(expand_acronyms(text, format="plain", force_expansion=True))

    except DictionaryError as e:
        # Output error as JSON for consistency with the structured format
        error_output = {
            "error": str(e),
            "input": text
        }
        print(json.dumps(error_output, ensure_ascii=False, indent=2))
        sys.exit(1)


if __name__ == "__main__":
    main()
