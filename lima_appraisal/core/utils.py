import hashlib
import unicodedata
from decimal import Decimal, ROUND_HALF_UP

def normalize_label(value: str) -> str:
    """
    Minimal normalization so user-typed categories match table keys:
    - trim whitespace
    - lowercase
    - strip accents ("Baño" -> "bano")
    - collapse multiple spaces
    """
    decomposed = unicodedata.normalize("NFKD", value)
    ascii_only = "".join(c for c in decomposed if not unicodedata.combining(c))
    return " ".join(ascii_only.strip().lower().split())

def round_money(value: float) -> int:
    """Whole units, halves rounded away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def format_money(value: float, label: str) -> str:
    """
    es-PE style amount followed by the currency label, no decimals:
    852720.4 -> "852,720 S/".
    """
    return f"{round_money(value):,} {label}"

def weak_etag(payload_bytes: bytes) -> str:
    """Weak ETag for client-side conditional requests."""
    h = hashlib.sha256(payload_bytes).hexdigest()[:24]
    return f'W/"{h}"'
