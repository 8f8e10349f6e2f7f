# Common English stopwords, bundled with the service and never reloaded.
# Contractions appear split the way the tokenizer splits them ("don't" -> "don", "t").
from typing import FrozenSet

STOPWORDS: FrozenSet[str] = frozenset(
    [
        "a", "about", "above", "after", "again", "against", "ain", "all", "also",
        "am", "an", "and", "any", "are", "aren", "as", "at",
        "be", "because", "been", "before", "being", "below", "between", "both",
        "but", "by",
        "can", "cannot", "could", "couldn",
        "d", "did", "didn", "do", "does", "doesn", "doing", "don", "down",
        "during",
        "each", "either", "else", "ever", "every",
        "few", "for", "from", "further",
        "had", "hadn", "has", "hasn", "have", "haven", "having", "he", "her",
        "here", "hers", "herself", "him", "himself", "his", "how", "however",
        "i", "if", "in", "into", "is", "isn", "it", "its", "itself",
        "just",
        "ll",
        "m", "ma", "may", "me", "might", "mightn", "more", "most", "must",
        "mustn", "my", "myself",
        "needn", "neither", "no", "nor", "not", "now",
        "o", "of", "off", "often", "on", "once", "only", "or", "other",
        "ought", "our", "ours", "ourselves", "out", "over", "own",
        "re",
        "s", "same", "shan", "she", "should", "shouldn", "since", "so", "some",
        "such",
        "t", "than", "that", "the", "their", "theirs", "them", "themselves",
        "then", "there", "these", "they", "this", "those", "through", "to",
        "too",
        "under", "until", "up", "upon", "us",
        "ve", "very",
        "was", "wasn", "we", "were", "weren", "what", "when", "where",
        "whether", "which", "while", "who", "whom", "why", "will", "with",
        "won", "would", "wouldn",
        "y", "yet", "you", "your", "yours", "yourself", "yourselves",
    ]
)
