"""Canonical AAC sentences tagged by category and frequency tier."""

from typing import NamedTuple


class CannedSentence(NamedTuple):
    text: str
    category: str
    context: str
    tier: str  # high | medium | low
    priority: int = 0


SENTENCES: tuple[CannedSentence, ...] = (
    # Everyday requests
    CannedSentence("I want to go outside", "wants", "outdoor activity", "high", 110),
    CannedSentence("Can you help me", "questions", "requesting assistance", "high", 110),
    CannedSentence("I'm hungry", "needs", "expressing hunger", "high", 110),
    CannedSentence("I'm tired", "feelings", "fatigue", "high", 110),
    CannedSentence("That's funny", "social", "amusement", "high", 110),
    CannedSentence("Let's play together", "play", "social play invitation", "high", 110),
    CannedSentence("I don't like that", "choices", "dislike", "high", 110),
    CannedSentence("I love this game", "play", "game enjoyment", "high", 110),
    CannedSentence("What are we doing today", "questions", "schedule inquiry", "high", 110),
    CannedSentence("Can I have a turn", "social", "turn taking", "high", 110),
    CannedSentence("I feel sad", "feelings", "negative emotion", "high", 110),
    CannedSentence("I need a break", "needs", "requesting pause", "high", 110),
    CannedSentence("Can I go to the toilet", "needs", "bathroom request", "high", 110),
    CannedSentence("I need help with this", "school", "specific assistance", "high", 110),
    CannedSentence("Can we play again", "play", "repeat activity", "high", 100),
    CannedSentence("I want some water", "wants", "drink request water", "high", 100),
    CannedSentence("I need help", "needs", "assistance", "high", 100),
    CannedSentence("I want more please", "wants", "more request", "high", 95),
    CannedSentence("I'm finished", "school", "task completion", "high", 95),
    CannedSentence("Thank you", "social", "gratitude", "high", 95),
    CannedSentence("Yes please", "social", "acceptance", "high", 90),
    CannedSentence("No thank you", "social", "polite refusal", "high", 90),
    CannedSentence("Stop please", "needs", "stop request", "high", 90),
    CannedSentence("Hello how are you", "greetings", "greeting question", "high", 90),
    CannedSentence("Good morning", "greetings", "morning greeting", "high", 85),
    CannedSentence("See you later", "greetings", "farewell", "high", 80),
    CannedSentence("I am happy", "feelings", "positive emotion", "high", 85),
    CannedSentence("I am hungry", "needs", "hunger food", "high", 85),
    CannedSentence("I am thirsty", "needs", "thirst drink water", "high", 85),
    CannedSentence("I feel sick", "body", "illness", "high", 85),
    CannedSentence("It hurts", "body", "pain", "high", 85),
    CannedSentence("My tummy hurts", "body", "stomach pain", "medium", 70),
    CannedSentence("I want to play", "play", "play request", "high", 85),
    CannedSentence("I want to go home", "wants", "going home", "high", 85),
    CannedSentence("I want to watch TV", "wants", "screen time", "medium", 60),
    CannedSentence("I want a snack", "food", "snack food request", "medium", 70),
    CannedSentence("I like it", "choices", "preference", "medium", 65),
    CannedSentence("I don't know", "social", "uncertainty", "medium", 65),
    CannedSentence("I don't understand", "school", "confusion", "medium", 70),
    CannedSentence("Wait for me", "social", "waiting", "medium", 55),
    CannedSentence("It's my turn", "social", "turn taking", "medium", 70),
    CannedSentence("Your turn", "social", "turn taking", "medium", 60),
    # Questions
    CannedSentence("Where is mum", "questions", "family location", "high", 80),
    CannedSentence("Where is the toilet", "questions", "bathroom location", "high", 80),
    CannedSentence("What is that", "questions", "object inquiry", "high", 75),
    CannedSentence("What time is it", "questions", "time inquiry", "medium", 65),
    CannedSentence("When is lunch", "questions", "lunch food schedule", "medium", 65),
    CannedSentence("Can I have some water", "questions", "drink request water", "high", 80),
    CannedSentence("Can we go outside", "questions", "outdoor request", "medium", 65),
    CannedSentence("Who is that", "questions", "person inquiry", "medium", 55),
    CannedSentence("How are you", "greetings", "wellbeing question", "high", 80),
    CannedSentence("Why not", "questions", "reason", "low", 40),
    # Third person and family
    CannedSentence("He wants to play", "people", "third person desire", "medium", 60),
    CannedSentence("She wants to play", "people", "third person desire", "medium", 60),
    CannedSentence("He is happy", "feelings", "third person emotion", "medium", 55),
    CannedSentence("She is sad", "feelings", "third person emotion", "medium", 55),
    CannedSentence("We are going home", "places", "going home together", "medium", 55),
    CannedSentence("They are playing", "play", "others playing", "low", 40),
    CannedSentence("Mum is coming", "people", "family arrival", "medium", 50),
    CannedSentence("Dad is here", "people", "family arrival", "medium", 50),
    CannedSentence("I love you mum", "people", "affection family", "medium", 60),
    CannedSentence("My friend is here", "people", "friend arrival", "low", 40),
    # School and places
    CannedSentence("Let's go to class", "school", "classroom transition", "high", 100),
    CannedSentence("I need a pencil", "school", "classroom supplies", "medium", 55),
    CannedSentence("Can I read a book", "school", "reading request", "medium", 55),
    CannedSentence("I want to go to the park", "places", "outing park", "medium", 60),
    CannedSentence("Let's go to the shop", "places", "outing shop", "low", 40),
    # Descriptions
    CannedSentence("That is", "connecting", "demonstrative", "high", 75),
    CannedSentence("This is", "connecting", "demonstrative", "high", 75),
    CannedSentence("That was fun", "social", "enjoyment past", "medium", 60),
    CannedSentence("It is big and red", "descriptions", "size and colour", "medium", 50),
    CannedSentence("It is hot", "weather", "temperature", "low", 40),
    CannedSentence("It is cold", "weather", "temperature", "low", 40),
    CannedSentence("That's my favourite colour", "preferences", "colour preference", "medium", 60),
    CannedSentence("I like your drawing", "social", "compliment", "medium", 60),
    # Time
    CannedSentence("I want to go to bed", "routines", "bedtime sleep", "medium", 55),
    CannedSentence("Time to go", "time", "transition", "medium", 55),
    CannedSentence("Not now", "time", "delay refusal", "medium", 50),
    CannedSentence("Later please", "time", "delay request", "low", 40),
    CannedSentence("All done", "routines", "completion", "high", 80),
)

TIER_BONUS: dict[str, int] = {"high": 40, "medium": 20, "low": 0}

# Tokens that give a sentence a connecting-word bonus when both sides contain one.
SENTENCE_CONNECTORS = frozenset({"am", "is", "are", "the", "a", "an", "to", "and", "or", "can", "will"})

STARTER_PRIORITY_THRESHOLD = 95
