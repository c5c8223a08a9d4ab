"""Curated word lists used by the entity extraction rules.

All entries are lowercase except STATE_ABBREVIATIONS and the "Dr." role cue.
"""

from __future__ import annotations


# Words that never form part of a person name. Function words, pronouns,
# crime-show vocabulary and common episode-title words.
STOP_WORDS: frozenset[str] = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "from", "as", "is", "was", "are", "were", "been", "be", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "must",
    "shall", "can", "need", "dare", "ought", "used", "it", "its", "he", "she", "they",
    "them", "his", "her", "their", "this", "that", "these", "those", "what", "which",
    "who", "whom", "whose", "when", "where", "why", "how", "all", "each", "every",
    "both", "few", "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "just", "also", "now", "here", "there",
    "then", "once", "after", "before", "being", "into", "through", "during", "until",
    "while", "about", "against", "between", "under", "over", "again", "further",
    "part", "story", "mystery", "murder", "death", "killer", "killing", "crime",
    "investigation", "police", "detective", "victim", "suspect", "accused", "trial",
    "episode", "special", "update", "new", "exclusive", "inside", "behind", "true",
    "real", "deadly", "dark", "secret", "secrets", "hidden", "revealed", "untold",
    "case", "family", "found", "young", "woman", "man", "mother", "father", "husband",
    "wife", "daughter", "son", "friend", "home", "night", "day", "year", "years",
    "time", "life", "body", "scene", "evidence", "first", "last", "one", "two",
    # title words
    "trouble", "hunt", "perfect", "morning", "spring", "summer", "fall", "winter",
    "cold", "hot", "final", "fatal", "dangerous", "missing",
    "lost", "gone", "taken", "vanished", "disappeared", "justice", "verdict",
    "truth", "lies", "betrayal", "love", "hate", "evil", "innocent",
    "guilty", "devil", "angel", "saint", "sinner", "stranger",
])

# Single-word state names plus the words that make up multi-word state names
# ("new york" -> "york"). A name candidate containing one is rejected.
STATE_FRAGMENTS: frozenset[str] = frozenset([
    "alabama", "alaska", "arizona", "arkansas", "california", "colorado", "connecticut",
    "delaware", "florida", "georgia", "hawaii", "idaho", "illinois", "indiana", "iowa",
    "kansas", "kentucky", "louisiana", "maine", "maryland", "massachusetts", "michigan",
    "minnesota", "mississippi", "missouri", "montana", "nebraska", "nevada", "hampshire",
    "jersey", "mexico", "york", "carolina", "dakota", "ohio", "oklahoma", "oregon",
    "pennsylvania", "island", "tennessee", "texas", "utah", "vermont", "virginia",
    "washington", "wisconsin", "wyoming",
])

# The 50 full state names. Order matters: it is the alternation order of the
# standalone-state pattern.
STATE_NAMES: tuple[str, ...] = (
    "alabama", "alaska", "arizona", "arkansas", "california", "colorado",
    "connecticut", "delaware", "florida", "georgia", "hawaii", "idaho",
    "illinois", "indiana", "iowa", "kansas", "kentucky", "louisiana",
    "maine", "maryland", "massachusetts", "michigan", "minnesota",
    "mississippi", "missouri", "montana", "nebraska", "nevada",
    "ohio", "oklahoma", "oregon", "pennsylvania", "tennessee", "texas",
    "utah", "vermont", "virginia", "washington", "wisconsin", "wyoming",
    "new hampshire", "new jersey", "new mexico", "new york",
    "north carolina", "north dakota", "south carolina", "south dakota",
    "west virginia", "rhode island",
)

# USPS abbreviations, matched case-sensitively.
STATE_ABBREVIATIONS: frozenset[str] = frozenset([
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID",
    "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS",
    "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND", "OH", "OK",
    "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV",
    "WI", "WY", "DC",
])

# Capitalized bigrams that look like names but are places.
NON_NAME_BIGRAMS: frozenset[str] = frozenset([
    "blue mountains", "fort bragg", "tarpon springs", "north carolina",
    "south carolina", "north dakota", "south dakota", "new york", "new jersey",
    "new mexico", "new hampshire", "west virginia", "rhode island",
])

# Nouns that introduce a person name ("victim John Smith").
ROLE_CUES: tuple[str, ...] = (
    "victim", "accused", "suspect", "defendant", "nurse", "doctor", "Dr.", "specialist",
)
