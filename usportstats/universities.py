"""
University Alias Resolution.

Converts the many spellings sources use for a school (abbreviations,
nicknames, former names, missing accents) to one canonical name. Unknown
names are never passed through: resolve_university raises UnresolvedAlias.
"""

import re
import unicodedata

from usportstats.errors import UnresolvedAlias

# =============================================================================
# UNIVERSITIES -> (short name, conference, province, aliases)
# =============================================================================

UNIVERSITIES: dict[str, tuple[str, str, str, list[str]]] = {
    # Canada West
    'University of Alberta': ('Alberta', 'CW', 'AB', ['alberta', 'u of a', 'ualberta', 'golden bears', 'pandas']),
    'Brandon University': ('Brandon', 'CW', 'MB', ['brandon', 'brandon bobcats', 'bobcats']),
    'University of British Columbia': (
        'UBC', 'CW', 'BC',
        ['ubc', 'british columbia', 'ubc vancouver', 'ubc thunderbirds'],
    ),
    'UBC Okanagan': ('UBCO', 'CW', 'BC', ['ubco', 'ubc okanagan heat', 'okanagan']),
    'University of Calgary': ('Calgary', 'CW', 'AB', ['calgary', 'u of c', 'ucalgary', 'dinos']),
    'University of the Fraser Valley': ('UFV', 'CW', 'BC', ['ufv', 'fraser valley', 'cascades']),
    'University of Lethbridge': ('Lethbridge', 'CW', 'AB', ['lethbridge', 'lethbridge pronghorns', 'pronghorns']),
    'MacEwan University': ('MacEwan', 'CW', 'AB', ['macewan', 'grant macewan', 'griffins']),
    'University of Manitoba': ('Manitoba', 'CW', 'MB', ['manitoba', 'umanitoba', 'bisons']),
    'Mount Royal University': ('Mount Royal', 'CW', 'AB', ['mount royal', 'mru', 'mount royal cougars']),
    'University of Northern British Columbia': (
        'UNBC', 'CW', 'BC', ['unbc', 'northern british columbia', 'timberwolves'],
    ),
    'University of Regina': ('Regina', 'CW', 'SK', ['regina', 'u of r', 'uregina', 'regina cougars']),
    'University of Saskatchewan': (
        'Saskatchewan', 'CW', 'SK', ['saskatchewan', 'usask', 'usask huskies', 'saskatchewan huskies'],
    ),
    'Thompson Rivers University': ('TRU', 'CW', 'BC', ['tru', 'thompson rivers', 'wolfpack']),
    'Trinity Western University': ('TWU', 'CW', 'BC', ['twu', 'trinity western', 'spartans']),
    'University of Victoria': ('Victoria', 'CW', 'BC', ['victoria', 'uvic', 'vikes']),
    'University of Winnipeg': ('Winnipeg', 'CW', 'MB', ['winnipeg', 'uwinnipeg', 'wesmen']),
    # OUA
    'Algoma University': ('Algoma', 'OUA', 'ON', ['algoma', 'algoma thunderbirds']),
    'Brock University': ('Brock', 'OUA', 'ON', ['brock', 'brock badgers', 'badgers']),
    'Carleton University': ('Carleton', 'OUA', 'ON', ['carleton', 'carleton ravens', 'ravens']),
    'University of Guelph': ('Guelph', 'OUA', 'ON', ['guelph', 'uoguelph', 'gryphons']),
    'Lakehead University': ('Lakehead', 'OUA', 'ON', ['lakehead', 'lakehead thunderwolves', 'thunderwolves']),
    'Laurentian University': ('Laurentian', 'OUA', 'ON', ['laurentian', 'laurentian voyageurs', 'voyageurs']),
    'McMaster University': ('McMaster', 'OUA', 'ON', ['mcmaster', 'mcmaster marauders', 'marauders']),
    'Nipissing University': ('Nipissing', 'OUA', 'ON', ['nipissing', 'nipissing lakers', 'lakers']),
    'Ontario Tech University': (
        'Ontario Tech', 'OUA', 'ON', ['ontario tech', 'uoit', 'ontario tech ridgebacks', 'ridgebacks'],
    ),
    'University of Ottawa': ('Ottawa', 'OUA', 'ON', ['ottawa', 'uottawa', 'u of o', 'gee-gees', 'gee gees']),
    "Queen's University": ('Queens', 'OUA', 'ON', ['queens', 'queens university', 'queens gaels', 'gaels']),
    'Royal Military College': ('RMC', 'OUA', 'ON', ['rmc', 'royal military college of canada', 'paladins']),
    'Toronto Metropolitan University': (
        'TMU', 'OUA', 'ON', ['tmu', 'toronto metropolitan', 'ryerson', 'ryerson university', 'rams', 'bold'],
    ),
    'University of Toronto': ('Toronto', 'OUA', 'ON', ['toronto', 'u of t', 'uoft', 'varsity blues']),
    'Trent University': ('Trent', 'OUA', 'ON', ['trent', 'trent excalibur', 'excalibur']),
    'University of Waterloo': ('Waterloo', 'OUA', 'ON', ['waterloo', 'uwaterloo', 'waterloo warriors']),
    'Western University': (
        'Western', 'OUA', 'ON',
        ['western', 'western ontario', 'university of western ontario', 'uwo', 'western mustangs', 'mustangs'],
    ),
    'Wilfrid Laurier University': ('Laurier', 'OUA', 'ON', ['laurier', 'wilfrid laurier', 'wlu', 'golden hawks']),
    'University of Windsor': ('Windsor', 'OUA', 'ON', ['windsor', 'uwindsor', 'lancers']),
    'York University': ('York', 'OUA', 'ON', ['york', 'york lions', 'lions']),
    # RSEQ
    "Bishop's University": ('Bishops', 'RSEQ', 'QC', ['bishops', 'bishops university', 'gaiters']),
    'Concordia University': ('Concordia', 'RSEQ', 'QC', ['concordia', 'concordia stingers', 'stingers']),
    'Université Laval': ('Laval', 'RSEQ', 'QC', ['laval', 'universite laval', 'rouge et or', 'ulaval']),
    'McGill University': ('McGill', 'RSEQ', 'QC', ['mcgill', 'mcgill redbirds', 'redbirds', 'martlets']),
    'Université de Montréal': ('Montreal', 'RSEQ', 'QC', ['montreal', 'udem', 'universite de montreal', 'carabins']),
    'Université de Sherbrooke': ('Sherbrooke', 'RSEQ', 'QC', ['sherbrooke', 'udes', 'vert et or']),
    'Université du Québec à Montréal': ('UQAM', 'RSEQ', 'QC', ['uqam', 'citadins']),
    'Université du Québec à Trois-Rivières': ('UQTR', 'RSEQ', 'QC', ['uqtr', 'trois-rivieres', 'patriotes']),
    # AUS
    'Acadia University': ('Acadia', 'AUS', 'NS', ['acadia', 'acadia axemen', 'axemen', 'axewomen']),
    'Cape Breton University': ('CBU', 'AUS', 'NS', ['cbu', 'cape breton', 'capers']),
    'Dalhousie University': ('Dalhousie', 'AUS', 'NS', ['dalhousie', 'dal', 'dalhousie tigers']),
    'Memorial University of Newfoundland': ('Memorial', 'AUS', 'NL', ['memorial', 'mun', 'sea-hawks', 'seahawks']),
    'Université de Moncton': ('Moncton', 'AUS', 'NB', ['moncton', 'umoncton', 'aigles bleus']),
    'Mount Allison University': ('Mount Allison', 'AUS', 'NB', ['mount allison', 'mta', 'mounties']),
    'University of New Brunswick': ('UNB', 'AUS', 'NB', ['unb', 'new brunswick', 'reds', 'varsity reds']),
    'University of Prince Edward Island': ('UPEI', 'AUS', 'PE', ['upei', 'prince edward island', 'panthers']),
    "Saint Mary's University": ('Saint Marys', 'AUS', 'NS', ['saint marys', 'smu', 'smu huskies', 'st marys']),
    'St. Francis Xavier University': ('StFX', 'AUS', 'NS', ['stfx', 'st francis xavier', 'x-men', 'x-women']),
    'St. Thomas University': ('St. Thomas', 'AUS', 'NB', ['st thomas', 'stu', 'tommies']),
}

CONFERENCES = {
    'CW': 'Canada West',
    'OUA': 'Ontario University Athletics',
    'RSEQ': 'Réseau du sport étudiant du Québec',
    'AUS': 'Atlantic University Sport',
}

# Names used by more than one member; these never resolve on their own
AMBIGUOUS_ALIASES: dict[str, tuple[str, ...]] = {
    'huskies': ('University of Saskatchewan', "Saint Mary's University"),
    'cougars': ('Mount Royal University', 'University of Regina'),
    'thunderbirds': ('University of British Columbia', 'Algoma University'),
    'u of m': ('University of Manitoba', 'Université de Montréal', 'Université de Moncton'),
    'u of s': ('University of Saskatchewan', 'Université de Sherbrooke'),
    'u of l': ('University of Lethbridge', 'Université Laval', 'Laurentian University'),
    'mac': ('McMaster University', 'MacEwan University'),
}


def _canonize(s: str) -> str:
    """Normalize string for lookup: strip accents, lowercase, remove punctuation, collapse spaces."""
    s = unicodedata.normalize('NFKD', s)
    s = ''.join(c for c in s if not unicodedata.combining(c))
    s = s.lower().replace('&', ' and ').replace("'", '').replace('’', '')
    s = re.sub(r'[^a-z0-9\s]', ' ', s)
    s = re.sub(r'\s+', ' ', s).strip()
    return s


def _make_reverse_map(
    universities: dict[str, tuple[str, str, str, list[str]]],
    ambiguous: dict[str, tuple[str, ...]] | None = None,
) -> dict[str, str]:
    """
    Build reverse lookup from every alias to its canonical name.

    Raises ValueError when one alias would point at two universities, or
    when an alias is listed as ambiguous.
    """
    ambiguous = ambiguous or {}
    result: dict[str, str] = {}
    for canonical, (short, _conf, _prov, aka_list) in universities.items():
        for alias in [canonical, short, *aka_list]:
            key = _canonize(alias)
            if key in ambiguous:
                raise ValueError(
                    f'Alias {alias!r} of {canonical!r} is ambiguous: {list(ambiguous[key])}'
                )
            existing = result.get(key)
            if existing is not None and existing != canonical:
                raise ValueError(
                    f'Alias {alias!r} is ambiguous: {existing!r} and {canonical!r}'
                )
            result[key] = canonical
    return result


# Build lookup map once at import
UNIVERSITY_MAP = _make_reverse_map(UNIVERSITIES, AMBIGUOUS_ALIASES)


def resolve_university(raw_name: str) -> str:
    """
    Resolve a raw university name to its canonical form.

    Args:
        raw_name: Name as printed by a source

    Returns:
        Canonical university name

    Raises:
        UnresolvedAlias: if the name matches no known alias or is shared by
            several universities
    """
    canonical = try_resolve_university(raw_name)
    if canonical is None:
        raise UnresolvedAlias(raw_name, ambiguous_candidates(raw_name))
    return canonical


def _lookup_keys(raw_name: str) -> list[str]:
    key = _canonize(raw_name)
    # 'University of X' / 'X University' forms of a known short name
    stripped = re.sub(r'^(?:the )?university of (?:the )?|^universite (?:de |du |d )?| university$', '', key)
    return [key, stripped]


def ambiguous_candidates(raw_name: str | None) -> tuple[str, ...]:
    """Universities an ambiguous name could mean; empty when it is not ambiguous."""
    if not raw_name or not str(raw_name).strip():
        return ()
    for key in _lookup_keys(str(raw_name)):
        if key in AMBIGUOUS_ALIASES:
            return AMBIGUOUS_ALIASES[key]
    return ()


def try_resolve_university(raw_name: str | None) -> str | None:
    """Canonical name, or None when the name is blank, unknown or ambiguous."""
    if not raw_name or not str(raw_name).strip():
        return None
    for key in _lookup_keys(str(raw_name)):
        if key in AMBIGUOUS_ALIASES:
            return None
        if key in UNIVERSITY_MAP:
            return UNIVERSITY_MAP[key]
    return None


def university_info(canonical: str) -> dict:
    short, conference, province, _aliases = UNIVERSITIES[canonical]
    return {
        'university': canonical,
        'short_name': short,
        'conference': conference,
        'conference_name': CONFERENCES[conference],
        'province': province,
    }
