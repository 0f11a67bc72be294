"""Closed word lists used by the grammatical repair rules."""

COPULA_FOR_SUBJECT: dict[str, str] = {
    "i": "am",
    "you": "are",
    "we": "are",
    "they": "are",
    "he": "is",
    "she": "is",
    "it": "is",
}

STATE_ADJECTIVES = frozenset(
    {
        "good", "bad", "happy", "sad", "tired", "hungry", "thirsty", "sick",
        "ready", "excited", "scared", "angry", "fine", "okay", "done",
        "finished", "busy", "hot", "cold", "warm", "cool", "big", "small",
        "nice", "great", "awesome",
    }
)

INFINITIVE_TRIGGERS = frozenset({"want", "wants", "need", "needs", "like", "likes", "love", "loves", "have", "has", "going"})

INFINITIVE_VERBS = frozenset(
    {
        "go", "play", "eat", "drink", "sleep", "read", "write", "watch",
        "listen", "run", "walk", "jump", "dance", "sing", "draw", "paint",
        "build", "make", "see", "hear", "feel", "think", "know", "learn",
        "teach", "come", "leave", "stay", "sit", "stand", "talk", "speak",
        "tell", "ask", "use",
    }
)

# Words that follow "want"/"need" directly and must never receive "to".
NO_INFINITIVE_WORDS = frozenset(
    {
        "help", "water", "food", "time", "break", "rest", "toilet", "bathroom",
        "mum", "dad", "friend", "teacher", "book", "pencil", "toy", "ball",
        "home", "school", "park", "shop", "car", "bus", "bed", "chair",
        "table", "apple", "banana", "milk", "juice", "snack", "lunch",
        "dinner", "breakfast", "homework", "work", "his", "her", "my", "your",
        "our", "their", "the", "a", "some", "more", "that", "this", "it",
    }
)

AGREEMENT_VERBS = (
    "want", "need", "like", "love", "have", "go", "play", "eat", "drink",
    "feel", "see", "help", "know", "make", "get",
)

ARTICLE_TRIGGERS = frozenset({"want", "need", "have", "see", "like", "love", "get", "find"})

COUNTABLE_NOUNS = frozenset(
    {
        "ball", "book", "toy", "dog", "cat", "car", "bike", "game",
        "bathroom", "toilet", "park", "shop", "school", "bed",
        "chair", "table", "drink", "sandwich", "hug", "turn",
    }
)

UNIQUE_NOUNS = frozenset({"bathroom", "toilet", "park", "shop", "school", "home", "bed"})

ABSTRACT_NOUNS = frozenset({"help", "time", "rest", "break", "homework", "work"})

DETERMINERS = frozenset(
    {"a", "an", "the", "my", "your", "his", "her", "our", "their", "some", "this", "that", "more"}
)

# Auxiliaries that invert with the subject in questions ("are you okay", "does he want").
QUESTION_AUXILIARIES = frozenset(
    {
        "am", "is", "are", "was", "were", "do", "does", "did", "can", "could",
        "will", "would", "shall", "should", "may", "might", "must", "have", "has",
    }
)
