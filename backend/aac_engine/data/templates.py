"""Sentence templates, starter words and category vocabularies.

Template keys are lower-case word tuples matched against the tail of
the current utterance; values are completions in rank order.
"""

SENTENCE_TEMPLATES: dict[tuple[str, ...], tuple[str, ...]] = {
    # Pronouns
    ("i",): ("am", "want", "need", "like", "have", "can", "feel", "my"),
    ("i'm",): ("happy", "sad", "tired", "hungry", "thirsty", "ready", "finished", "sorry", "sick"),
    ("he",): ("wants", "needs", "likes", "has", "is", "can", "his"),
    ("she",): ("wants", "needs", "likes", "has", "is", "can", "her"),
    ("you",): ("want", "need", "like", "have", "are", "can", "your"),
    ("we",): ("want", "need", "like", "have", "are", "can", "our"),
    ("they",): ("want", "need", "like", "have", "are", "can", "their"),
    ("it",): ("is", "was", "hurts", "looks"),
    # Determiners and demonstratives
    ("the",): ("toilet", "park", "ball", "book", "toy", "shop", "car", "bus", "bathroom"),
    ("a",): ("drink", "snack", "break", "ball", "book", "toy", "friend"),
    ("my",): ("mum", "dad", "friend", "toy", "book", "turn", "sister", "brother"),
    ("that",): ("is", "was", "one", "looks", "sounds"),
    ("that", "is"): ("good", "mine", "funny", "bad", "nice", "loud"),
    ("this",): ("is", "was", "one", "looks"),
    ("this", "is"): ("good", "mine", "fun", "hard", "my"),
    ("it", "is"): ("big", "small", "hot", "cold", "red", "loud", "quiet"),
    # Desire
    ("i", "want"): ("to", "some", "water", "the", "a", "more", "help", "that", "my", "to go", "some water"),
    ("i", "want", "to"): ("go", "play", "eat", "drink", "sleep", "read", "watch", "go outside", "go home"),
    ("i", "want", "the"): ("ball", "book", "toy", "red one", "blue one", "bathroom"),
    ("i", "want", "a"): ("drink", "snack", "toy", "book", "hug", "turn"),
    ("i", "want", "some"): ("water", "food", "juice", "more", "help"),
    ("you", "want"): ("to", "your", "some", "that", "more", "the", "a"),
    ("he", "wants"): ("to", "his", "some", "that", "more", "help", "the", "a"),
    ("she", "wants"): ("to", "her", "some", "that", "more", "help", "the", "a"),
    ("we", "want"): ("to", "our", "some", "more", "to play together", "the", "a"),
    ("they", "want"): ("to", "their", "some", "more", "help", "the", "a"),
    ("want", "to"): ("go", "play", "eat", "drink", "sleep", "read", "draw", "watch"),
    ("wants", "to"): ("go", "play", "eat", "drink", "help", "come", "see"),
    ("want", "some"): ("water", "food", "lunch", "juice"),
    # Need
    ("i", "need"): ("help", "to", "the toilet", "water", "a break", "a", "the", "mum", "dad", "a pencil"),
    ("i", "need", "to"): ("go", "eat", "drink", "sleep", "rest", "go home", "use the toilet"),
    ("i", "need", "the"): ("toilet", "bathroom", "book", "pencil"),
    ("i", "need", "a"): ("break", "drink", "snack", "rest", "pencil"),
    ("i", "need", "help"): ("with", "please", "now"),
    ("i", "need", "help", "with"): ("my", "the", "this", "that"),
    ("he", "needs"): ("help", "to", "his", "water", "a break", "the", "a"),
    ("she", "needs"): ("help", "to", "her", "water", "a break", "the", "a"),
    ("we", "need"): ("help", "to", "water", "our", "the", "a"),
    ("they", "need"): ("help", "to", "water", "their", "the", "a"),
    ("need", "to"): ("go", "eat", "drink", "sleep", "rest", "use the toilet"),
    ("needs", "to"): ("go", "eat", "drink", "rest", "help"),
    # Like and love
    ("i", "like"): ("it", "this", "that", "to", "you", "playing", "my", "the", "a"),
    ("i", "like", "to"): ("play", "eat", "read", "draw", "watch", "listen", "go outside"),
    ("he", "likes"): ("his", "to", "this", "that", "it", "playing", "the", "a"),
    ("she", "likes"): ("her", "to", "this", "that", "it", "playing", "the", "a"),
    ("like", "to"): ("play", "eat", "read", "draw", "watch", "listen"),
    ("i", "love"): ("you", "it", "this", "that", "playing", "mum", "dad", "my family"),
    ("he", "loves"): ("this", "that", "it", "playing", "eating"),
    ("she", "loves"): ("this", "that", "it", "playing", "eating"),
    # Have
    ("i", "have"): ("a", "to", "my", "the", "a question", "something", "finished"),
    ("i", "have", "to"): ("go", "eat", "sleep", "go home", "tell you", "use the toilet"),
    ("he", "has"): ("a", "to", "his", "the", "something"),
    ("she", "has"): ("a", "to", "her", "the", "something"),
    ("have", "to"): ("go", "eat", "sleep", "leave", "finish"),
    # Feelings and states
    ("i", "feel"): ("happy", "sad", "tired", "sick", "excited", "scared", "angry", "good", "bad"),
    ("he", "feels"): ("happy", "sad", "tired", "sick", "good", "bad"),
    ("she", "feels"): ("happy", "sad", "tired", "sick", "good", "bad"),
    ("i", "am"): ("happy", "sad", "tired", "hungry", "thirsty", "ready", "finished", "sick", "excited"),
    ("you", "are"): ("happy", "funny", "nice", "my friend", "ready"),
    ("he", "is"): ("happy", "sad", "tired", "hungry", "here", "coming"),
    ("she", "is"): ("happy", "sad", "tired", "hungry", "here", "coming"),
    ("we", "are"): ("ready", "going", "finished", "happy", "eating"),
    ("they", "are"): ("here", "coming", "ready", "happy", "playing"),
    ("i", "don't"): ("understand", "know", "like this", "want that"),
    ("i", "finished"): ("my work", "eating", "reading", "playing"),
    # Questions
    ("what",): ("is", "are", "do", "time", "happened", "is that"),
    ("what", "is"): ("that", "your name", "the time", "for lunch", "happening"),
    ("what", "do"): ("you want", "i need", "we do now"),
    ("where",): ("is", "are", "do", "is the toilet", "are we going"),
    ("where", "is"): ("the toilet", "mum", "dad", "my", "it", "my friend"),
    ("where", "are"): ("you", "we going", "they"),
    ("when",): ("is", "are", "can", "is lunch", "are we going"),
    ("who",): ("is", "is that", "are you", "is coming"),
    ("why",): ("is", "not", "are you sad", "do we have to"),
    ("how",): ("are you", "much", "many", "do you feel", "old are you"),
    ("how", "are"): ("you", "you feeling", "they"),
    ("can",): ("i", "you", "we", "he", "she"),
    ("can", "i"): ("have", "go", "play", "please", "have water", "go outside", "have a turn"),
    ("can", "you"): ("help me", "please", "show me", "come here", "give me"),
    ("can", "we"): ("go", "play", "eat", "have", "go outside", "go home"),
    ("could", "you"): ("help me", "please", "show me"),
    ("would", "you"): ("like", "please", "help me"),
    # Actions and places
    ("go",): ("home", "outside", "to", "with", "to school", "to the park", "to bed"),
    ("go", "to"): ("school", "bed", "the park", "the shop", "the toilet", "home"),
    ("go", "with"): ("me", "you", "mum", "dad"),
    ("going", "to"): ("school", "the park", "the shop", "play", "eat", "bed"),
    ("play",): ("outside", "with me", "a game", "together", "at the park"),
    ("let's",): ("play", "go", "eat", "read", "play a game"),
    ("let's", "play"): ("a game", "outside", "together"),
    ("watch",): ("tv", "a movie", "cartoons", "the"),
    ("read",): ("a book", "a story", "with me"),
    ("draw",): ("a picture", "with me", "something"),
    ("at",): ("home", "school", "the park", "the shop"),
    ("in",): ("the car", "my room", "the garden", "bed"),
    ("turn",): ("the page", "around", "off", "on"),
    # Time
    ("time", "to"): ("go", "eat", "sleep", "play", "go home"),
    ("time", "for"): ("lunch", "dinner", "bed", "school"),
    # Social
    ("good",): ("morning", "afternoon", "night", "job"),
    ("thank",): ("you", "you very much"),
    ("please",): ("help me", "can i", "stop", "wait"),
    ("excuse",): ("me",),
    ("more",): ("please", "water", "food"),
    ("all",): ("done", "finished"),
    ("see",): ("you later", "you tomorrow"),
}

# (word, priority, note)
INITIAL_WORDS: tuple[tuple[str, int, str], ...] = (
    ("I", 100, "First person subject"),
    ("Can", 95, "Permission or ability question"),
    ("What", 90, "Question word"),
    ("Where", 90, "Location question"),
    ("I'm", 90, "I am contraction"),
    ("Thank", 85, "Gratitude"),
    ("Please", 85, "Polite request"),
    ("Hi", 85, "Greeting"),
    ("Hello", 85, "Greeting"),
    ("Sorry", 85, "Apology"),
    ("Yes", 85, "Affirmation"),
    ("No", 85, "Negation"),
    ("He", 80, "Third person subject"),
    ("She", 80, "Third person subject"),
    ("We", 80, "First person plural subject"),
    ("They", 75, "Third person plural subject"),
    ("You", 75, "Second person subject"),
    ("How", 75, "Question word"),
    ("When", 75, "Time question"),
    ("Who", 75, "Person question"),
    ("Why", 70, "Reason question"),
    ("Let's", 70, "Suggestion"),
    ("More", 70, "Quantity request"),
    ("All", 65, "Completion"),
    ("Goodbye", 65, "Farewell"),
    ("My", 60, "Possessive"),
    ("The", 60, "Article"),
    ("This", 60, "Demonstrative"),
    ("That", 60, "Demonstrative"),
    ("It", 55, "Pronoun"),
    ("Mum", 55, "Family member"),
    ("Dad", 55, "Family member"),
)

# (word, priority, preceding words that make it grammatical)
CONNECTING_WORDS: tuple[tuple[str, int, tuple[str, ...]], ...] = (
    ("am", 200, ("i",)),
    ("is", 150, ("he", "she", "it", "that", "this")),
    ("are", 150, ("you", "we", "they")),
    ("the", 145, ("want", "need", "have", "see", "like", "love", "in", "on", "at", "with")),
    ("a", 140, ("want", "need", "have", "see", "like", "love", "in", "on", "at", "with")),
    ("to", 135, ("want", "need", "like", "love", "go", "going", "have")),
    ("and", 130, ()),
    ("can", 125, ("i", "you", "we", "he", "she", "they")),
    ("want", 120, ("i", "you", "we", "they")),
    ("need", 120, ("i", "you", "we", "they")),
    ("have", 115, ("i", "you", "we", "they")),
    ("go", 110, ("to", "can", "want", "need")),
    ("like", 110, ("i", "you", "we", "they")),
    ("my", 110, ("i", "want", "need", "have", "lost", "found")),
    ("that", 105, ("is", "was", "see", "want", "need")),
    ("this", 105, ("is", "was", "see", "want", "need")),
    ("your", 105, ("you", "want", "need", "have")),
    ("his", 105, ("he", "wants", "needs", "has")),
    ("her", 105, ("she", "wants", "needs", "has")),
    ("with", 100, ("help", "play", "go", "come")),
    ("for", 100, ("time", "wait", "look")),
    ("our", 100, ("we",)),
    ("their", 100, ("they",)),
    ("in", 95, ("am", "is", "are", "go")),
    ("on", 95, ("is", "are", "put", "turn")),
    ("at", 90, ("am", "is", "are", "look")),
    ("or", 90, ()),
    ("but", 85, ()),
)

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "greetings": ("hello", "hi", "goodbye", "bye", "how are you", "please", "thank you", "yes", "no", "good morning", "good afternoon", "good night", "see you later", "sorry", "excuse me"),
    "core": ("i", "you", "he", "she", "we", "they", "want", "need", "like", "help", "more", "go", "stop", "yes", "no", "please", "can", "the", "a", "that", "this", "am", "is", "are"),
    "people": ("mum", "dad", "mom", "friend", "teacher", "family", "brother", "sister", "mate", "grandma", "grandpa", "boy", "girl", "baby"),
    "actions": ("eat", "drink", "play", "sleep", "walk", "run", "read", "write", "watch", "listen", "sit", "stand", "jump", "dance", "go", "sing", "draw", "give", "take", "throw", "catch", "push", "pull", "wash", "clean"),
    "feelings": ("happy", "sad", "angry", "scared", "excited", "tired", "love", "worried", "calm", "hurt", "sick", "good", "bad", "feel", "surprised", "bored", "confused"),
    "food": ("water", "juice", "milk", "apple", "banana", "bread", "snack", "lunch", "dinner", "breakfast", "hungry", "thirsty", "eat", "drink", "cheese", "biscuit", "cake", "pizza", "sandwich", "egg", "chicken", "fish", "carrot"),
    "home": ("house", "bed", "bathroom", "kitchen", "tv", "door", "window", "room", "bedroom", "toilet", "chair", "table", "phone", "tablet"),
    "school": ("book", "pencil", "paper", "class", "teacher", "lunch", "recess", "learn", "homework", "read", "write", "pen", "crayon", "scissors", "glue", "backpack", "finished", "maths"),
    "places": ("park", "shop", "school", "home", "playground", "car", "bus", "outside", "inside", "library", "hospital", "doctor", "beach", "pool"),
    "body": ("head", "hand", "foot", "arm", "leg", "eye", "ear", "nose", "mouth", "hurt", "pain", "sick", "face", "teeth", "hair", "tummy"),
    "routines": ("morning", "afternoon", "evening", "night", "breakfast", "lunch", "dinner", "bedtime", "wake up", "sleep", "bath time", "brush teeth", "get dressed"),
    "questions": ("what", "where", "when", "who", "why", "how", "is", "are", "do", "can", "will", "which"),
    "colours": ("red", "blue", "green", "yellow", "orange", "purple", "pink", "black", "white", "brown"),
    "numbers": ("one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten", "more", "less"),
    "animals": ("dog", "cat", "bird", "fish", "horse", "cow", "pig", "sheep", "rabbit", "pet", "duck", "bear", "lion", "elephant", "monkey"),
    "clothing": ("shirt", "pants", "dress", "shoes", "socks", "hat", "coat", "jacket", "jumper", "wear", "gloves"),
    "weather": ("sunny", "rainy", "cloudy", "windy", "hot", "cold", "warm", "cool", "weather", "outside", "snow"),
    "time": ("now", "later", "today", "tomorrow", "yesterday", "morning", "afternoon", "night", "time", "soon"),
    "toys": ("toy", "ball", "doll", "game", "puzzle", "blocks", "play", "fun", "car", "truck", "train", "bike", "swing", "slide"),
}

# Utterance phrases that make particular category words more likely (+8).
CATEGORY_CONTEXT_BOOSTS: tuple[tuple[tuple[str, ...], frozenset[str]], ...] = (
    (("i want", "want to", "he wants", "she wants", "we want", "they want"),
     frozenset({"eat", "drink", "play", "sleep", "go", "read", "watch", "the", "a", "to", "water"})),
    (("feel", "feels"),
     frozenset({"happy", "sad", "angry", "scared", "excited", "tired", "good", "bad"})),
    (("need", "needs"),
     frozenset({"help", "water", "food", "toilet", "bathroom", "rest", "break", "the", "a", "to", "pencil"})),
    (("where",),
     frozenset({"mum", "dad", "toilet", "bathroom", "home", "school", "park", "he", "she", "my", "the"})),
    (("what",),
     frozenset({"that", "this", "your", "the", "time", "happening"})),
    (("can",),
     frozenset({"have", "go", "play", "help", "please", "the", "a"})),
    (("am", "are"),
     frozenset({"happy", "sad", "tired", "hungry", "thirsty", "reading", "eating", "finished"})),
)

# Last word of the utterance -> likely next category words (+6).
LAST_WORD_BOOSTS: dict[str, frozenset[str]] = {
    "to": frozenset({"go", "play", "eat", "drink", "sleep", "read", "the"}),
    "the": frozenset({"toilet", "bathroom", "park", "shop", "school", "ball", "book", "page"}),
    "can": frozenset({"i", "you", "he", "she", "we", "they", "go", "have"}),
    "my": frozenset({"mum", "dad", "sister", "brother", "friend", "toy", "book", "work"}),
    "want": frozenset({"to", "the", "a", "some", "more", "water"}),
    "need": frozenset({"to", "the", "a", "help", "water", "bathroom"}),
    "i": frozenset({"am"}),
}

# First word of the utterance -> likely continuations (+7).
FIRST_WORD_BOOSTS: dict[str, frozenset[str]] = {
    "i": frozenset({"want", "need", "like", "love", "feel", "am", "have", "can", "see"}),
    "you": frozenset({"are", "can", "want", "need", "like", "have"}),
    "what": frozenset({"is", "are", "do", "does", "can", "will", "the"}),
    "where": frozenset({"is", "are", "do", "does", "can", "will", "the"}),
    "when": frozenset({"is", "are", "do", "does", "can", "will", "the"}),
    "who": frozenset({"is", "are", "do", "does", "can", "will", "the"}),
    "why": frozenset({"is", "are", "do", "does", "can", "will", "the"}),
    "how": frozenset({"is", "are", "do", "does", "can", "will", "the"}),
}

CATEGORY_CONNECTORS = frozenset({"the", "a", "can", "go", "that", "this", "to", "and", "or", "am", "is", "are"})
