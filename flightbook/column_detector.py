"""
Auto-detection and mapping of flight logbook column headers.

Maps common header names (English and German logbook spreadsheets,
club exports, manual spreadsheets) to our flight fields.

Supports:
- Auto-detection via fuzzy header matching
- Explicit mapping via INI config file
- Validation of the columns needed to identify a flight
"""

import configparser
import re


# ============ Header Alias Database ============
# Maps our field name to a list of known aliases.
# Aliases are checked case-insensitively. The FIRST match wins.
# More specific aliases should come before generic ones.

HEADER_ALIASES = {
    'date': [
        'date', 'flight date', 'flt date', 'flight_date',
        # German
        'datum', 'flugdatum',
    ],
    'aircraft_type': [
        'aircraft type', 'type', 'a/c type', 'ac type', 'aircraft',
        # German
        'lfz typ', 'lfz-typ', 'lfz_typ', 'luftfahrzeug', 'muster', 'typ',
    ],
    'tail_number': [
        'registration', 'reg', 'tail', 'tail number', 'tail no',
        'aircraft id', 'a/c reg', 'tail #',
        # German
        'kennzeichen', 'kennz',
    ],
    'crew': [
        'crew', 'pilot', 'pic name', 'names',
        # German
        'besatzung', 'pilot / lehrer',
    ],
    'origin': [
        'from', 'departure', 'dep', 'origin', 'dep airport',
        # German
        'von', 'startort', 'abflugort',
    ],
    'destination': [
        'to', 'arrival', 'arr', 'dest', 'destination', 'arr airport',
        # German
        'nach', 'landeort', 'zielort',
    ],
    'takeoff_time': [
        'takeoff', 'take off', 'takeoff time', 't/o', 'start time', 'departure time',
        # German
        'start', 'startzeit', 'abflug',
    ],
    'landing_time': [
        'landing time', 'arrival time', 'ldg time',
        # German
        'landung', 'landezeit',
    ],
    'block_off': [
        'block off', 'block-off', 'off block', 'out',
        # German
        'block ab', 'abblock',
    ],
    'block_on': [
        'block on', 'block-on', 'on block', 'in',
        # German
        'block an', 'anblock',
    ],
    'landings': [
        'landings', 'ldg', 'no. of landings', 'number of landings',
        # German
        'landungen', 'anzahl landungen', 'ldg anzahl',
    ],
    'flight_time': [
        'flight time', 'air time', 'airborne',
        # German
        'flugzeit', 'flugstunden',
    ],
    'block_time': [
        'block time', 'total time', 'block', 'total',
        # German
        'blockzeit', 'gesamtzeit',
    ],
    'remarks': [
        'remarks', 'comments', 'notes', 'remark',
        # German
        'bemerkung', 'bemerkungen',
    ],
    'role': [
        'role', 'function', 'pilot function',
        # German
        'rolle', 'funktion',
    ],
    'time_of_day': [
        'time of day', 'day/night', 'day night',
        # German
        'zeit', 'tag/nacht',
    ],
    'page': [
        'page', 'logbook page', 'page no',
        # German
        'seite',
    ],
}

# Readable names for reports
COLUMN_NAMES = {
    'date': 'Date',
    'aircraft_type': 'Aircraft Type',
    'tail_number': 'Tail Number',
    'crew': 'Crew',
    'origin': 'From',
    'destination': 'To',
    'takeoff_time': 'Takeoff',
    'landing_time': 'Landing',
    'block_off': 'Block Off',
    'block_on': 'Block On',
    'landings': 'Landings',
    'flight_time': 'Flight Time',
    'block_time': 'Block Time',
    'remarks': 'Remarks',
    'role': 'Role',
    'time_of_day': 'Time of Day',
    'page': 'Page',
}

# Fields that make up the identity key of a flight
REQUIRED_COLUMNS = {'date', 'takeoff_time', 'tail_number'}


def _normalize_header(header):
    """Normalize a header string for matching.

    Lowercases, strips whitespace, collapses runs of spaces/underscores
    and drops surrounding punctuation.
    """
    if header is None:
        return ''
    s = str(header).strip().lower()
    s = re.sub(r'[\s_]+', ' ', s)
    s = s.strip(' .:()[]')
    return s


def detect_columns(headers):
    """Auto-detect column mapping from header names.

    Uses the HEADER_ALIASES database to match the source column headers
    to our flight fields.

    Args:
        headers: List of raw header strings from the source file.

    Returns:
        Dict mapping field name -> source column index (0-based).
        Only includes detected columns.
    """
    mapping = {}
    used_source_cols = set()
    normalized_headers = [_normalize_header(h) for h in headers]

    # First pass: exact matches (highest confidence)
    for field, aliases in HEADER_ALIASES.items():
        for alias in aliases:
            norm_alias = _normalize_header(alias)
            for src_idx, norm_header in enumerate(normalized_headers):
                if src_idx in used_source_cols:
                    continue
                if norm_header == norm_alias:
                    mapping[field] = src_idx
                    used_source_cols.add(src_idx)
                    break
            if field in mapping:
                break

    # Second pass: substring matches for unmapped columns
    for field, aliases in HEADER_ALIASES.items():
        if field in mapping:
            continue
        for alias in aliases:
            norm_alias = _normalize_header(alias)
            if len(norm_alias) < 4:
                continue  # Short aliases match too much as substrings
            for src_idx, norm_header in enumerate(normalized_headers):
                if src_idx in used_source_cols or not norm_header:
                    continue
                if norm_alias in norm_header:
                    mapping[field] = src_idx
                    used_source_cols.add(src_idx)
                    break
            if field in mapping:
                break

    return mapping


def load_column_mapping(mapping_file):
    """Load explicit column mapping from an INI file.

    Format:
        [columns]
        Date = Flugdatum
        Tail Number = Kennz.
        Block Time = 7

    Keys are our column names (or any alias), values are source column
    names or 0-based indices.

    Args:
        mapping_file: Path to the mapping INI file.

    Returns:
        Dict mapping field name -> source column name or index.
        The caller must resolve names against actual headers.

    Raises:
        ValueError: If the file has no [columns] section.
    """
    parser = configparser.ConfigParser()
    parser.read(mapping_file, encoding='utf-8')

    if not parser.has_section('columns'):
        raise ValueError(f"Mapping file {mapping_file} must have a [columns] section")

    name_to_field = {}
    for field, name in COLUMN_NAMES.items():
        name_to_field[_normalize_header(name)] = field
        name_to_field[_normalize_header(field)] = field

    mapping = {}
    for our_name, source_val in parser.items('columns'):
        our_norm = _normalize_header(our_name)
        field = name_to_field.get(our_norm)
        if field is None:
            for candidate, aliases in HEADER_ALIASES.items():
                if our_norm in [_normalize_header(a) for a in aliases]:
                    field = candidate
                    break

        if field is None:
            print(f"  WARNING: Unknown column name in mapping: '{our_name}'")
            continue

        source_val = source_val.strip()
        if source_val.isdigit():
            mapping[field] = int(source_val)
        else:
            mapping[field] = source_val

    return mapping


def resolve_mapping_names(mapping, headers):
    """Resolve string source column names to indices.

    Args:
        mapping: Dict from load_column_mapping (may contain string names).
        headers: List of actual header strings from the source.

    Returns:
        Dict mapping field name -> source column index (int).
    """
    normalized_headers = [_normalize_header(h) for h in headers]
    resolved = {}

    for field, source_val in mapping.items():
        if isinstance(source_val, int):
            resolved[field] = source_val
            continue
        norm_source = _normalize_header(source_val)
        for idx, norm_h in enumerate(normalized_headers):
            if norm_h == norm_source or (norm_source and norm_source in norm_h):
                resolved[field] = idx
                break
        else:
            print(f"  WARNING: Source column '{source_val}' not found in headers")

    return resolved


def validate_mapping(mapping):
    """Return the names of required fields missing from a mapping, sorted."""
    return sorted(REQUIRED_COLUMNS - set(mapping))


def print_mapping_report(mapping, headers):
    """Print which source column feeds each field."""
    print("  Column mapping:")
    for field, name in COLUMN_NAMES.items():
        if field in mapping:
            idx = mapping[field]
            source = headers[idx] if idx < len(headers) else f'#{idx}'
            print(f"    {name:<14} <- {source}")
