"""
Demo script for legal-expand

Expands a few typical legal sentences with the default options and with
the most common option combinations.
"""

from legal_expand import expand_acronyms


SAMPLES = [
    "La AEAT gestiona el IVA y el IRPF.",
    "Según el art. 24 de la CE, publicado en el BOE.",
    "La A.E.A.T. remitió el expediente al TEAC.",
    "Los II. EE. se regulan en la Ley 38/1992.",
    "Consulte https://www.boe.es/BOE o escriba a info@aeat.es",
]


def print_section(title):
    print("\n" + "=" * 80)
    print(f"  {title}")
    print("=" * 80)


def main():
    print_section("Default options")
    for text in SAMPLES:
        print(f"\nInput:  {text}")
        print(f"Output: {expand_acronyms(text)}")

    print_section("Only the first occurrence")
    text = "La AEAT notificó la liquidación; la AEAT reclamó el pago."
    print(f"\nInput:  {text}")
    print(f"Output: {expand_acronyms(text, expand_only_first=True)}")

    print_section("Include / exclude filters")
    text = "La AEAT publica en el BOE las normas del IVA."
    print(f"\nInput:           {text}")
    print(f"exclude=['BOE']: {expand_acronyms(text, exclude=['BOE'])}")
    print(f"include=['IVA']: {expand_acronyms(text, include=['IVA'])}")

    print_section("Case-insensitive matching")
    text = "la aeat y el boe"
    print(f"\nInput:               {text}")
    print(f"preserve_case=True:  {expand_acronyms(text)}")
    print(f"preserve_case=False: {expand_acronyms(text, preserve_case=False)}")


if __name__ == "__main__":
    main()
