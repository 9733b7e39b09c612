"""
Anonymized excerpts of Aruba invoice text as produced by the PDF text layer.
"""

INVOICE_HEADER = """AMAZON EXPORT SALES LLC
COMMERCIAL INVOICE
CONSIGNEE
Alexander Vrolijk
Oranjestad, Aruba
ASIN DESCRIPTION PRODUCT GROUP HS CODE ECCN COO QTY TOTAL NET
WEIGHT (KG) UNIT VALUE (USD) TOTAL UNIT
VALUE (USD)
"""

INVOICE_TABLE = """B012345678 Wireless Mouse
Black color
ELC8471.30.0000EAR99US25.0019.9919.99
Seller of Record:
Acme Corp
B00YJJG39A Dog Water Fountain
PET PRODUCTS8421.21.0000EAR99CN10.3817.5917.59
1935660500 The Art of Cooking
BOOK 4901.99.0050 EAR99 US 1 1.45 54.95 54.95
"""

INVOICE_FOOTER = """TOTAL ITEM VALUE 92.53
FREIGHT CHARGE 29.92
TOTAL 122.45
"""

SAMPLE_INVOICE_TEXT = INVOICE_HEADER + INVOICE_TABLE + INVOICE_FOOTER


def sample_page_map(text: str = SAMPLE_INVOICE_TEXT) -> dict:
    """Page 1 up to the second product, page 2 from there on."""
    return {0: 1, text.index("B00YJJG39A"): 2}


def build_invoice_text(table: str) -> str:
    """Wrap product table lines in the standard invoice header and footer."""
    return INVOICE_HEADER + table + INVOICE_FOOTER
