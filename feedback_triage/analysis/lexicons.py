"""
Fixed keyword tables used by the feedback classifiers.

Sentiment terms are matched as whole words; every other table is matched as a
plain substring of the lowercased feedback text.
"""

STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "is", "was", "are", "been", "be", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might",
    "i", "you", "he", "she", "it", "we", "they", "my", "your", "his", "her",
    "its", "our", "their", "this", "that", "these", "those",
])

POSITIVE_TERMS = (
    "excellent", "great", "amazing", "wonderful", "fantastic", "love", "perfect",
    "awesome", "brilliant", "outstanding", "superb", "impressed", "helpful",
    "fast", "easy", "smooth", "reliable", "efficient", "satisfied", "happy",
    "good", "best", "thank", "appreciate", "recommend", "pleased",
)

NEGATIVE_TERMS = (
    "terrible", "awful", "horrible", "worst", "bad", "poor", "disappointing",
    "frustrated", "angry", "annoying", "slow", "broken", "bug", "issue",
    "problem", "error", "fail", "crash", "useless", "waste", "hate",
    "difficult", "confusing", "complicated", "unreliable", "unresponsive",
)

# Evaluated in this order; suggestions often carry critical words too.
TONE_CUES = (
    ("Constructive", (
        "feature", "suggestion", "add", "improve", "better", "would like", "maybe",
        "consider", "idea", "wish", "missing", "enhancement",
    )),
    ("Appreciative", (
        "love", "great", "amazing", "thanks", "easy", "helpful", "perfect", "best",
        "good", "excellent", "happy",
    )),
    ("Critical", (
        "broken", "bug", "crash", "fail", "error", "slow", "hard", "difficult",
        "confusing", "hate", "bad", "worst", "issue",
    )),
    ("Inquisitive", (
        "how", "why", "what", "where", "when", "question", "help", "assist", "support",
    )),
)

HIGH_IMPACT_TERMS = ("blocking", "crash", "broken", "lost", "fail", "urgent", "immediately")
MEDIUM_IMPACT_TERMS = ("issue", "problem", "slow", "bug", "difficult", "confusing")
# Low is the default; these never change the outcome.
LOW_IMPACT_TERMS = ("suggestion", "minor", "cosmetic", "typo", "nice to have")

BUG_TERMS = ("bug", "error", "crash", "broken", "not working", "issue", "problem")
FEATURE_TERMS = ("feature", "add", "need", "would like", "suggestion", "improve", "enhancement")
