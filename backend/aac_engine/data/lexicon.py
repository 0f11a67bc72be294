"""Irregular inflection tables and small closed word lists.

Verb entries map the base form to ``(past, past_participle,
present_3rd, continuous)``.
"""

IRREGULAR_VERBS: dict[str, tuple[str, str, str, str]] = {
    "be": ("was", "been", "is", "being"),
    "have": ("had", "had", "has", "having"),
    "do": ("did", "done", "does", "doing"),
    "go": ("went", "gone", "goes", "going"),
    "get": ("got", "got", "gets", "getting"),
    "make": ("made", "made", "makes", "making"),
    "take": ("took", "taken", "takes", "taking"),
    "come": ("came", "come", "comes", "coming"),
    "see": ("saw", "seen", "sees", "seeing"),
    "know": ("knew", "known", "knows", "knowing"),
    "think": ("thought", "thought", "thinks", "thinking"),
    "feel": ("felt", "felt", "feels", "feeling"),
    "give": ("gave", "given", "gives", "giving"),
    "find": ("found", "found", "finds", "finding"),
    "tell": ("told", "told", "tells", "telling"),
    "become": ("became", "become", "becomes", "becoming"),
    "leave": ("left", "left", "leaves", "leaving"),
    "bring": ("brought", "brought", "brings", "bringing"),
    "begin": ("began", "begun", "begins", "beginning"),
    "keep": ("kept", "kept", "keeps", "keeping"),
    "hold": ("held", "held", "holds", "holding"),
    "write": ("wrote", "written", "writes", "writing"),
    "stand": ("stood", "stood", "stands", "standing"),
    "hear": ("heard", "heard", "hears", "hearing"),
    "let": ("let", "let", "lets", "letting"),
    "mean": ("meant", "meant", "means", "meaning"),
    "set": ("set", "set", "sets", "setting"),
    "meet": ("met", "met", "meets", "meeting"),
    "run": ("ran", "run", "runs", "running"),
    "pay": ("paid", "paid", "pays", "paying"),
    "sit": ("sat", "sat", "sits", "sitting"),
    "speak": ("spoke", "spoken", "speaks", "speaking"),
    "lie": ("lay", "lain", "lies", "lying"),
    "lead": ("led", "led", "leads", "leading"),
    "read": ("read", "read", "reads", "reading"),
    "grow": ("grew", "grown", "grows", "growing"),
    "lose": ("lost", "lost", "loses", "losing"),
    "fall": ("fell", "fallen", "falls", "falling"),
    "send": ("sent", "sent", "sends", "sending"),
    "build": ("built", "built", "builds", "building"),
    "understand": ("understood", "understood", "understands", "understanding"),
    "draw": ("drew", "drawn", "draws", "drawing"),
    "break": ("broke", "broken", "breaks", "breaking"),
    "spend": ("spent", "spent", "spends", "spending"),
    "cut": ("cut", "cut", "cuts", "cutting"),
    "rise": ("rose", "risen", "rises", "rising"),
    "drive": ("drove", "driven", "drives", "driving"),
    "buy": ("bought", "bought", "buys", "buying"),
    "wear": ("wore", "worn", "wears", "wearing"),
    "choose": ("chose", "chosen", "chooses", "choosing"),
    "seek": ("sought", "sought", "seeks", "seeking"),
    "throw": ("threw", "thrown", "throws", "throwing"),
    "catch": ("caught", "caught", "catches", "catching"),
    "teach": ("taught", "taught", "teaches", "teaching"),
    "eat": ("ate", "eaten", "eats", "eating"),
    "drink": ("drank", "drunk", "drinks", "drinking"),
    "sleep": ("slept", "slept", "sleeps", "sleeping"),
    "swim": ("swam", "swum", "swims", "swimming"),
    "sing": ("sang", "sung", "sings", "singing"),
    "ring": ("rang", "rung", "rings", "ringing"),
    "fly": ("flew", "flown", "flies", "flying"),
    "fight": ("fought", "fought", "fights", "fighting"),
    "win": ("won", "won", "wins", "winning"),
    "forget": ("forgot", "forgotten", "forgets", "forgetting"),
    "hide": ("hid", "hidden", "hides", "hiding"),
    "shake": ("shook", "shaken", "shakes", "shaking"),
    "ride": ("rode", "ridden", "rides", "riding"),
}

IRREGULAR_NOUNS: dict[str, str] = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
    "sheep": "sheep",
    "deer": "deer",
    "fish": "fish",
    "moose": "moose",
    "series": "series",
    "species": "species",
    "ox": "oxen",
    "knife": "knives",
    "life": "lives",
    "wife": "wives",
    "leaf": "leaves",
    "loaf": "loaves",
    "potato": "potatoes",
    "tomato": "tomatoes",
    "cactus": "cacti",
    "focus": "foci",
    "fungus": "fungi",
    "nucleus": "nuclei",
    "syllabus": "syllabi",
    "analysis": "analyses",
    "diagnosis": "diagnoses",
    "thesis": "theses",
    "crisis": "crises",
    "phenomenon": "phenomena",
    "criterion": "criteria",
    "datum": "data",
}

# (comparative, superlative)
IRREGULAR_ADJECTIVES: dict[str, tuple[str, str]] = {
    "good": ("better", "best"),
    "bad": ("worse", "worst"),
    "far": ("farther", "farthest"),
    "little": ("less", "least"),
    "much": ("more", "most"),
    "many": ("more", "most"),
}

VERB_SUFFIXES = ("ate", "ify", "ize", "ise", "en")
NOUN_SUFFIXES = ("tion", "sion", "ment", "ness", "ity", "er", "or", "ist", "ism", "ship")
ADJECTIVE_SUFFIXES = ("ful", "less", "ous", "ive", "able", "ible", "al", "ic", "ish", "y")

# Regular verbs common in AAC vocabularies; the irregular table covers the rest.
COMMON_VERBS = frozenset(
    {
        "want", "need", "like", "love", "help", "play", "look", "stop",
        "open", "close", "wash", "watch", "listen", "talk", "walk", "jump",
        "push", "pull", "finish", "start", "wait", "try", "use", "work",
        "cook", "clean", "dance", "call", "ask", "share", "turn", "move",
        "miss", "hate", "hurt", "brush", "visit", "learn", "kick", "climb",
    }
)

# Function words that look inflected but must never be stripped.
UNINFLECTED_WORDS = frozenset(
    {
        "is", "was", "has", "does", "this", "his", "its", "us", "yes",
        "always", "sometimes", "please", "bus", "gas", "less", "unless",
        "glass", "class", "grass", "dress", "bed", "red", "need", "feed",
        "seed", "speed", "thing", "something", "nothing", "anything",
        "everything", "morning", "evening", "ceiling", "king", "ring",
        "sing", "spring", "string", "wing", "bring", "swing", "during",
    }
)

SUBJECT_PRONOUNS = ("i", "you", "he", "she", "it", "we", "they")
THIRD_PERSON_SINGULAR = frozenset({"he", "she", "it"})
PLURAL_SUBJECTS = frozenset({"i", "you", "we", "they"})

# Subjects recognised by the structural check (pronouns plus common people words).
STRUCTURAL_SUBJECTS = frozenset(
    {
        "i", "you", "he", "she", "it", "we", "they", "mum", "mom", "dad",
        "teacher", "friend", "brother", "sister", "baby", "nan", "pop",
        "grandma", "grandpa", "everyone", "someone", "this", "that",
    }
)

STRUCTURAL_VERBS = frozenset(
    {
        "am", "is", "are", "was", "were", "be", "have", "has", "had", "do",
        "does", "did", "can", "will", "would", "could", "should", "feel",
        "feels", "want", "wants", "need", "needs", "like", "likes", "love",
        "loves", "go", "goes", "went", "play", "plays", "eat", "eats",
        "drink", "drinks", "see", "sees", "help", "helps", "get", "gets",
        "make", "makes", "think", "know", "look", "come", "comes", "sleep",
        "hurt", "hurts", "stop", "finish", "read", "watch", "listen", "'m",
    }
)

FUTURE_MARKERS = frozenset({"will", "going", "gonna", "tomorrow", "later", "soon"})
PAST_MARKERS = frozenset({"yesterday", "ago", "was", "were", "did", "before", "earlier"})
PRESENT_MARKERS = frozenset({"now", "today", "currently", "am", "is", "are"})
