import logging

from itertools import islice


logger = logging.getLogger(__name__)

# in order of priority, the first one is also the fallback
SEPARATOR_CANDIDATES = [';', ',', '|', '\t']

MAX_LINES = 100


def detect_separator(file_name: str) -> str:
    """ Guess the separator of a delimited text file from the first lines.

    The candidate occurring most often wins, ties go to the candidate listed first. If no candidate
    occurs at all ';' is returned.
    """

    counts = {separator: 0 for separator in SEPARATOR_CANDIDATES}

    with open(file_name, newline=None, encoding='utf-8', errors='replace') as data_file:
        for line in islice(data_file, MAX_LINES):
            for separator in SEPARATOR_CANDIDATES:
                counts[separator] += line.count(separator)

    if not any(counts.values()):
        logger.info("No separator found in %s, falling back to %r", file_name, SEPARATOR_CANDIDATES[0])
        return SEPARATOR_CANDIDATES[0]

    # max keeps the first of several equal maxima
    separator = max(SEPARATOR_CANDIDATES, key=lambda candidate: counts[candidate])

    logger.info("Detected separator %r in %s (counts: %s)", separator, file_name, counts)

    return separator
