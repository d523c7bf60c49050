"""Name-based demographic inference over static first-name and surname tables."""

from __future__ import annotations

import logging

from models import ASIAN, BLACK, FEMALE, HISPANIC, MALE, UNKNOWN_INFERENCE, WHITE, Inference

LOGGER = logging.getLogger(__name__)

NAME_GENDER_CONFIDENCE = 0.85

MALE_FIRST_NAMES: frozenset[str] = frozenset({
    "john", "michael", "david", "james", "robert", "william", "richard",
    "charles", "joseph", "thomas", "christopher", "daniel", "paul", "mark",
    "donald", "steven", "kenneth", "andrew", "joshua", "kevin", "brian",
    "george", "edward", "ronald", "timothy", "jason", "jeffrey", "ryan",
    "jacob", "gary", "nicholas", "eric", "jonathan", "stephen", "larry",
    "justin", "scott", "brandon", "benjamin", "samuel", "gregory",
    "alexander", "patrick", "frank", "raymond", "jack", "dennis", "jerry",
    "tyler", "aaron", "jose", "henry", "adam", "douglas", "nathan", "peter",
    "zachary", "kyle", "noah", "alan", "ethan", "jeremy", "lionel", "mike",
    "carl", "wayne", "ralph", "roy", "eugene", "louis", "philip", "bobby",
})

FEMALE_FIRST_NAMES: frozenset[str] = frozenset({
    "mary", "patricia", "jennifer", "linda", "elizabeth", "barbara", "susan",
    "jessica", "sarah", "karen", "nancy", "lisa", "betty", "helen", "sandra",
    "donna", "carol", "ruth", "sharon", "michelle", "laura", "kimberly",
    "deborah", "dorothy", "amy", "angela", "ashley", "brenda", "emma",
    "olivia", "cynthia", "marie", "janet", "catherine", "frances",
    "christine", "samantha", "debra", "rachel", "carolyn", "virginia",
    "maria", "heather", "diane", "julie", "joyce", "victoria", "kelly",
    "christina", "joan", "evelyn", "lauren", "judith", "megan", "cheryl",
    "andrea", "hannah", "jacqueline", "martha", "gloria", "teresa", "sara",
    "janice", "julia",
})

HISPANIC_SURNAMES: frozenset[str] = frozenset({
    "garcia", "rodriguez", "martinez", "hernandez", "lopez", "gonzalez",
    "wilson", "perez", "sanchez", "ramirez", "torres", "flores", "rivera",
    "gomez", "diaz", "reyes", "morales", "ortiz", "gutierrez", "chavez",
    "ramos", "castillo", "mendoza", "vargas", "alvarez", "jimenez", "romero",
    "vasquez", "herrera", "medina", "castro", "ruiz",
})

BLACK_SURNAMES: frozenset[str] = frozenset({
    "washington", "jefferson", "jackson", "johnson", "williams", "brown",
    "jones", "davis", "miller", "wilson", "moore", "taylor", "anderson",
    "thomas", "harris", "martin", "thompson", "white", "lewis", "walker",
    "hall", "allen", "young", "king", "wright", "scott", "green", "baker",
    "adams", "nelson", "hill", "ramirez", "campbell", "mitchell", "roberts",
    "carter", "phillips", "evans", "turner", "torres", "parker", "collins",
    "edwards", "stewart", "flores", "morris", "nguyen", "murphy", "rivera",
    "cook", "rogers", "morgan", "peterson", "cooper", "reed", "bailey",
    "bell", "gomez", "kelly", "howard", "ward", "cox", "diaz", "richardson",
    "wood", "watson", "brooks", "bennett", "gray", "james", "reyes", "cruz",
    "hughes", "price", "myers", "long", "foster", "sanders", "ross",
    "morales", "powell", "sullivan", "russell", "ortiz", "jenkins",
    "gutierrez", "perry", "butler", "barnes", "fisher",
})

ASIAN_SURNAMES: frozenset[str] = frozenset({
    # Chinese
    "li", "wang", "zhang", "liu", "chen", "yang", "huang", "zhao", "wu",
    "zhou", "xu", "sun", "ma", "zhu", "hu", "guo", "he", "gao", "lin", "luo",
    "zheng", "liang", "xie", "song", "tang", "deng", "feng", "yu", "dong",
    "xiao", "cheng", "han", "zeng", "peng", "cao", "dai", "wei", "xue", "du",
    "ren", "shen", "lv", "jiang", "lu", "gu", "meng", "qin", "shao", "wan",
    "hou", "yin", "qiu", "jin", "tan",
    # Korean
    "kim", "park", "lee", "choi", "jung", "kang", "cho", "yoon", "jang",
    "lim", "oh", "seo", "shin", "kwon", "hwang", "ahn",
    # Japanese
    "nakamura", "tanaka", "suzuki", "watanabe", "ito", "yamamoto",
    "takahashi", "kobayashi", "sato", "sasaki", "yamada", "yamazaki", "mori",
    "abe", "ikeda", "hashimoto", "yamashita", "ishikawa", "nakajima", "maeda",
    "ogawa", "takeuchi",
    # Vietnamese
    "nguyen", "tran", "le", "pham", "hoang", "phan", "vu", "vo", "dang",
    "bui", "do", "ho", "ngo", "duong", "ly",
})

# Checked in order; the first table containing the surname wins. The tables
# overlap (e.g. "wilson", "nguyen"), so this order decides those names.
SURNAME_TABLES: tuple[tuple[str, frozenset[str], float], ...] = (
    (HISPANIC, HISPANIC_SURNAMES, 0.80),
    (BLACK, BLACK_SURNAMES, 0.70),
    (ASIAN, ASIAN_SURNAMES, 0.85),
)

DEFAULT_RACE = Inference(WHITE, 0.60)


def classify_gender_by_name(name: str | None) -> Inference:
    """Infer gender from the first whitespace-delimited token of ``name``.

    Exact, case-insensitive lookup only. Empty input, a one-letter first token
    or a first name outside both tables yields ``(Unknown, 0.0)``.
    """
    if not isinstance(name, str) or not name.strip():
        LOGGER.debug("Gender by name: empty or invalid input %r", name)
        return UNKNOWN_INFERENCE

    first_name = name.split()[0].lower()
    if len(first_name) < 2:
        LOGGER.debug("Gender by name: first name too short: %r", first_name)
        return UNKNOWN_INFERENCE

    if first_name in MALE_FIRST_NAMES:
        result = Inference(MALE, NAME_GENDER_CONFIDENCE)
    elif first_name in FEMALE_FIRST_NAMES:
        result = Inference(FEMALE, NAME_GENDER_CONFIDENCE)
    else:
        result = UNKNOWN_INFERENCE

    LOGGER.debug("Gender by name: %s -> %s (confidence: %s)", first_name, result.label, result.confidence)
    return result


def classify_race_by_surname(name: str) -> Inference:
    """Infer race from the last single-space-delimited token of ``name``.

    Surnames absent from every table default to ``(White, 0.60)``.
    """
    surname = name.split(" ")[-1].lower()
    for race, surnames, confidence in SURNAME_TABLES:
        if surname in surnames:
            return Inference(race, confidence)
    return DEFAULT_RACE
