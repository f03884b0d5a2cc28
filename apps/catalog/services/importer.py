"""
Catalog import from spreadsheets.

Two layouts are understood:

- a plain CSV with one header row and one product per row, whose column
  names are matched in English or Slovak (with a fuzzy fallback);
- the supplier's multi-row sheet: a header block, then three rows per
  product separated by blank rows.

Import is lenient: rows that cannot be used are skipped and reported as
warnings, the rest are inserted.
"""

import csv
import io
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional
from uuid import UUID

from django.db import DatabaseError, transaction
from fuzzywuzzy import fuzz

from apps.catalog.models import Product, ProductVariant
from apps.common.money import ZERO, quantize_money
from apps.cycles.services.lifecycle import get_cycle

from .exceptions import ImportFormatError

logger = logging.getLogger(__name__)

FUZZY_HEADER_THRESHOLD = 85

# Normalised header -> product field
COLUMN_ALIASES = {
    'name': 'name',
    'nazov': 'name',
    'produkt': 'name',
    'description': 'description',
    'description1': 'description',
    'popis': 'description',
    'popis1': 'description',
    'description2': 'flavor_profile',
    'popis2': 'flavor_profile',
    'flavorprofile': 'flavor_profile',
    'chutovyprofil': 'flavor_profile',
    'roast': 'roast_type',
    'roasttype': 'roast_type',
    'prazenie': 'roast_type',
    'purpose': 'purpose',
    'ucel': 'purpose',
}

WEIGHT_RE = re.compile(r'(\d+(?:[.,]\d+)?)\s*(kg|g)\b')
SECTION_MARKERS = ('praženie', 'prazenie', 'voc 5', 'voc 26', 'zrnková káva')
PRICE_SEPARATORS = (' / ', '/', ' - ', '-')

# Multi-row sheet columns (0-based): B, H, I
COL_MAIN = 1
COL_SIDE = 7
COL_PRICE = 8


@dataclass
class ImportResult:
    inserted: List[Product] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def normalize_header(text: str) -> str:
    """Lowercase, strip diacritics and everything that is not a letter or digit."""
    text = unicodedata.normalize('NFKD', text or '')
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r'[^a-z0-9]', '', text.lower())


def weight_label(text: str) -> Optional[str]:
    """'Cena 1kg' -> '1kg', 'price_250g' -> '250g', 'Name' -> None."""
    match = WEIGHT_RE.search((text or '').lower())
    if not match:
        return None
    return f"{match.group(1).replace(',', '.')}{match.group(2)}"


def parse_price(value) -> Optional[Decimal]:
    """
    Read a price cell such as '8,90 €', '1.234,50' or '35.3 EUR'.

    The last of ',' or '.' is taken as the decimal separator; the other is
    a thousands separator. Returns None when nothing positive is found.
    """
    cleaned = re.sub(r'[^\d.,]', '', str(value or ''))
    if not cleaned:
        return None

    decimal_pos = max(cleaned.rfind(','), cleaned.rfind('.'))
    if decimal_pos >= 0:
        whole = re.sub(r'[.,]', '', cleaned[:decimal_pos])
        cleaned = f"{whole}.{cleaned[decimal_pos + 1:]}"

    try:
        price = quantize_money(Decimal(cleaned))
    except (InvalidOperation, ValueError):
        return None
    return price if price > ZERO else None


def _decode(content) -> str:
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise ImportFormatError("File is not UTF-8 text")
    return content.lstrip('\ufeff')


def _read_rows(content) -> List[List[str]]:
    try:
        return [
            [cell.strip() for cell in row]
            for row in csv.reader(io.StringIO(_decode(content)))
        ]
    except csv.Error as e:
        raise ImportFormatError(f"Malformed CSV: {e}")


def match_column(header: str) -> Optional[str]:
    """
    Map a CSV header to a product field or a price column.

    Returns a field name, ``'price:<label>'`` for weight columns, or None.
    """
    label = weight_label(header)
    if label:
        return f"price:{label}"

    key = normalize_header(header)
    if not key:
        return None
    if key in COLUMN_ALIASES:
        return COLUMN_ALIASES[key]

    best, best_score = None, 0
    for alias, target in COLUMN_ALIASES.items():
        score = fuzz.ratio(key, alias)
        if score > best_score:
            best, best_score = target, score
    return best if best_score >= FUZZY_HEADER_THRESHOLD else None


def _cell(row: List[str], index: int) -> str:
    return row[index] if index < len(row) else ''


def _insert(cycle, data: dict, prices: Dict[str, Decimal], result: ImportResult, row_ref: str) -> None:
    try:
        with transaction.atomic():
            product = Product.objects.create(cycle=cycle, **data)
            ProductVariant.objects.bulk_create([
                ProductVariant(product=product, label=label, price=price)
                for label, price in prices.items()
            ])
    except DatabaseError as e:
        logger.warning("Import row %s skipped: %s", row_ref, e)
        result.warnings.append(f"{row_ref}: could not be saved ({e})")
        return

    if not prices:
        result.warnings.append(f'"{product.name}": no prices found')
    result.inserted.append(product)


def import_products_csv(*, cycle_id: UUID, content) -> ImportResult:
    """
    Import a one-row-per-product CSV into a cycle.

    Rows without a name are skipped silently.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        ImportFormatError: If the content is not CSV or has no name column
    """
    cycle = get_cycle(cycle_id)
    rows = [row for row in _read_rows(content) if any(row)]
    if not rows:
        raise ImportFormatError("The file is empty")

    header, records = rows[0], rows[1:]
    columns = {index: match_column(title) for index, title in enumerate(header)}
    if 'name' not in columns.values():
        raise ImportFormatError("No product name column found")

    result = ImportResult()
    for line_no, row in enumerate(records, start=2):
        data = {'name': '', 'description': '', 'flavor_profile': '', 'roast_type': '', 'purpose': ''}
        prices = {}
        for index, target in columns.items():
            if target is None:
                continue
            value = _cell(row, index)
            if target.startswith('price:'):
                price = parse_price(value)
                if price is not None:
                    prices[target.split(':', 1)[1]] = price
            elif value and not data[target]:
                data[target] = value

        if not data['name']:
            continue
        _insert(cycle, data, prices, result, f"row {line_no}")

    logger.info(
        "CSV import into cycle %s: %d inserted, %d warnings",
        cycle.id, len(result.inserted), len(result.warnings)
    )
    return result


def _is_separator(row: List[str]) -> bool:
    return sum(1 for cell in row if cell) <= 1


def _is_section_header(row: List[str]) -> bool:
    text = ' '.join(row).lower()
    return any(marker in text for marker in SECTION_MARKERS)


def split_price_cell(cell: str, variant_label: str):
    """
    Turn a price cell plus its label into ({label: price}, warning).

    '8,9 / 35,3 EUR' with label '250g / 1kg' -> {'250g': 8.90, '1kg': 35.30}.
    """
    text = re.sub(r'\s+', ' ', cell or '').strip()
    if not text:
        return {}, None

    label = (variant_label or '').lower()
    small = None
    for weight in ('150', '200', '250'):
        if weight in label:
            small = f"{weight}g"
            break
    has_kg = '1kg' in label or '1 kg' in label

    parts = None
    too_many = False
    for sep in PRICE_SEPARATORS:
        if sep in text:
            parts = [part.strip() for part in text.split(sep) if part.strip()]
            if len(parts) == 2:
                break
            too_many = too_many or len(parts) > 2

    if not parts or len(parts) != 2:
        if too_many:
            return {}, f'price cell "{text}" has more than two prices, skipped'
        price = parse_price(text)
        if price is None:
            return {}, None
        if small:
            return {small: price}, None
        if has_kg:
            return {'1kg': price}, None
        return {'250g': price}, 'single price found, assumed 250g'

    small = small or '250g'
    small_price, kg_price = parse_price(parts[0]), parse_price(parts[1])
    warning = None
    if small_price is not None and kg_price is not None and kg_price < small_price:
        small_price, kg_price = kg_price, small_price
        warning = f'prices were swapped ({small} was dearer than 1kg)'

    prices = {}
    if small_price is not None:
        prices[small] = small_price
    if kg_price is not None:
        prices['1kg'] = kg_price
    return prices, warning


def parse_multirow(content):
    """
    Parse the multi-row layout into (products, warnings).

    Each product is a dict with the model fields plus ``prices``.
    """
    rows = _read_rows(content)
    products, warnings = [], []
    current = None
    step = 0
    in_products = False

    def finish():
        if current and current['name']:
            products.append(current)

    for row in rows:
        if not in_products:
            in_products = _is_separator(row)
            continue

        if _is_section_header(row):
            continue

        if _is_separator(row):
            finish()
            current, step = None, 0
            continue

        if step == 0:
            current = {
                'name': _cell(row, COL_MAIN),
                'purpose': _cell(row, COL_SIDE),
                'description': '',
                'flavor_profile': '',
                'roast_type': '',
                'prices': {},
                '_label': _cell(row, COL_PRICE),
            }
            step = 1
        elif step == 1:
            current['description'] = _cell(row, COL_MAIN)
            current['prices'], warning = split_price_cell(_cell(row, COL_PRICE), current['_label'])
            if warning:
                warnings.append(f'"{current["name"]}": {warning}')
            step = 2
        else:
            current['flavor_profile'] = _cell(row, COL_MAIN)
            current['roast_type'] = _cell(row, COL_SIDE)
            finish()
            current, step = None, 0

    finish()
    return products, warnings


def import_products_multirow(*, cycle_id: UUID, content) -> ImportResult:
    """
    Import the supplier's three-rows-per-product sheet into a cycle.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        ImportFormatError: If no product could be read
    """
    cycle = get_cycle(cycle_id)
    products, warnings = parse_multirow(content)
    if not products:
        raise ImportFormatError(
            "No products found; expected three rows per product separated by a blank row"
        )

    result = ImportResult(warnings=warnings)
    for parsed in products:
        prices = parsed.pop('prices')
        parsed.pop('_label')
        _insert(cycle, parsed, prices, result, f'"{parsed["name"]}"')

    logger.info(
        "Multi-row import into cycle %s: %d inserted, %d warnings",
        cycle.id, len(result.inserted), len(result.warnings)
    )
    return result
