"""Keyword tokenization for section titles and command anchors.

Handles the shapes that show up in infrastructure documentation: hyphenated
and underscored identifiers, dotted paths, CamelCase names and version-like
numbers.
"""

import re

from refindex.knowledge.stopwords import is_stopword


class TextTokenizer:
    """Tokenizer for technical reference text.

    Features:
    - Lowercases every token
    - Splits hyphenated, underscored, slashed and dotted terms
      ("aws_s3_bucket" -> ["aws", "s3", "bucket"])
    - Keeps numbers intact ("0.12", "1.5")
    - Splits CamelCase ("DynamoDBTable" -> ["dynamo", "db", "table"])
    - Removes stopwords while preserving CLI verbs

    Usage:
        >>> tokenizer = TextTokenizer()
        >>> tokenizer.tokenize("Configure the S3 backend")
        ['configure', 's3', 'backend']

        >>> tokenizer.tokenize("terraform workspace new")
        ['terraform', 'workspace', 'new']

        >>> tokenizer.tokenize("aws_s3_bucket")
        ['aws', 's3', 'bucket']
    """

    WORD_PATTERN = re.compile(r"[\w./-]+")

    NUMERIC_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

    SEPARATORS = re.compile(r"[._/-]+")

    # Acronym runs stay together: "DynamoDBTable" -> Dynamo DB Table
    CAMEL_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

    def __init__(self, remove_stopwords: bool = True, min_length: int = 2):
        """Initialize tokenizer.

        Args:
            remove_stopwords: Whether to filter out stopwords
            min_length: Minimum token length to keep (digits are always kept)
        """
        self.remove_stopwords = remove_stopwords
        self.min_length = min_length

    def tokenize(self, text: str) -> list[str]:
        """Tokenize text into lowercase keywords, in order of appearance."""
        if not text:
            return []

        tokens = []
        for word in self.WORD_PATTERN.findall(text):
            word = word.strip("./-")
            if not word:
                continue

            if self.NUMERIC_PATTERN.match(word):
                tokens.append(word)
                continue

            for part in self.SEPARATORS.split(word):
                for piece in self._split_camel_case(part):
                    if self._is_valid_token(piece):
                        tokens.append(piece)

        return tokens

    def tokenize_to_set(self, text: str) -> set[str]:
        return set(self.tokenize(text))

    def _split_camel_case(self, word: str) -> list[str]:
        """Split CamelCase word into lowercase components.

        Words that are already all-lowercase or all-uppercase (possibly with
        digits, like "s3" or "HCL") are returned whole.
        """
        if word.islower() or word.isupper() or word.isdigit():
            return [word.lower()]
        parts = self.CAMEL_PATTERN.findall(word)
        if len(parts) > 1:
            return [p.lower() for p in parts]
        return [word.lower()]

    def _is_valid_token(self, word: str) -> bool:
        if word.isdigit():
            return True

        if len(word) < self.min_length:
            return False

        if not any(c.isalnum() for c in word):
            return False

        if self.remove_stopwords and is_stopword(word):
            return False

        return True

    @staticmethod
    def normalize_query(query: str) -> str:
        """Normalize query text: collapse whitespace and lowercase.

        Example:
            >>> TextTokenizer.normalize_query("  Terraform   Init  ")
            'terraform init'
        """
        return " ".join(query.split()).lower()
