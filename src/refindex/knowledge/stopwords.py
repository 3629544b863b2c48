"""Stopwords list for command reference documentation.

Common English words are filtered; CLI verbs that look like ordinary words
("apply", "show", "import") are preserved.
"""

STOPWORDS = {
    # Articles
    'a', 'an', 'the',

    # Pronouns
    'this', 'that', 'these', 'those',
    'it', 'its', 'itself',
    'they', 'them', 'their', 'theirs', 'themselves',
    'you', 'your', 'yours', 'we', 'our', 'us',
    'what', 'which', 'who', 'whom', 'whose',

    # Prepositions
    'with', 'from', 'to', 'for', 'of', 'in', 'on', 'at', 'by', 'as',
    'into', 'through', 'during', 'before', 'after', 'above', 'below',
    'between', 'under', 'again', 'further', 'then', 'once', 'about',

    # Conjunctions
    'and', 'or', 'but', 'nor', 'so', 'yet',

    # Common verbs (be/have forms)
    'is', 'are', 'was', 'were', 'be', 'been', 'being',
    'have', 'has', 'had', 'having',
    'do', 'does', 'did', 'doing',

    # Modal verbs
    'will', 'would', 'can', 'could', 'may', 'might',
    'shall', 'should', 'must',

    # Other common words
    'if', 'than', 'because', 'while', 'where', 'when',
    'why', 'how', 'all', 'both', 'each', 'few', 'more',
    'most', 'other', 'some', 'such', 'no', 'not', 'only',
    'own', 'same', 'too', 'very',

    # Common adverbs
    'here', 'there', 'now', 'just', 'also',
    'always', 'never', 'often', 'sometimes',
}

# CLI verbs and nouns that must stay searchable
COMMAND_PRESERVE = {
    'init',
    'plan',
    'apply',
    'destroy',
    'show',
    'list',
    'import',
    'output',
    'state',
    'workspace',
    'get',
    'set',
    'new',
    'select',
    'delete',
    'move',
    'remove',
    'refresh',
    'validate',
    'fmt',
    'lock',
    'unlock',
    'backend',
    'provider',
    'module',
    'resource',
    'variable',
}


def is_stopword(word: str) -> bool:
    """Check if a word is a stopword.

    Example:
        >>> is_stopword('the')
        True
        >>> is_stopword('Apply')
        False
    """
    word_lower = word.lower()

    if word_lower in COMMAND_PRESERVE:
        return False

    return word_lower in STOPWORDS
