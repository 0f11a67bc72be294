"""Synonyms, semantic categories and the topic taxonomy.

Categories may overlap (``okay`` is both a quality and an agreement
word); membership in any shared category makes two words similar.
"""

SYNONYMS: dict[str, tuple[str, ...]] = {
    "want": ("need", "like", "wish"),
    "need": ("want", "require", "must have"),
    "like": ("love", "enjoy", "want"),
    "love": ("like", "adore", "enjoy"),
    "good": ("great", "nice", "awesome"),
    "bad": ("terrible", "awful", "not good"),
    "happy": ("glad", "excited", "joyful"),
    "sad": ("upset", "unhappy", "down"),
    "angry": ("mad", "cross", "upset"),
    "scared": ("afraid", "frightened", "worried"),
    "big": ("large", "huge", "giant"),
    "small": ("little", "tiny", "mini"),
    "go": ("move", "travel", "walk"),
    "come": ("arrive", "visit", "approach"),
    "eat": ("consume", "have", "taste"),
    "drink": ("sip", "have", "consume"),
    "help": ("assist", "support"),
    "stop": ("finish", "end", "quit"),
    "talk": ("speak", "chat", "say"),
    "look": ("see", "watch"),
    "yes": ("yeah", "okay", "sure"),
    "no": ("nope", "not"),
    "hello": ("hi", "hey"),
    "bye": ("goodbye", "see you"),
    "thanks": ("thank you", "cheers", "ta"),
}

SEMANTIC_CATEGORIES: dict[str, frozenset[str]] = {
    "emotions": frozenset({"happy", "sad", "angry", "scared", "excited", "glad", "upset", "joyful", "unhappy", "mad", "worried", "calm", "afraid", "frightened", "cross"}),
    "actions": frozenset({"run", "walk", "move", "travel", "jump", "go", "come", "arrive", "approach", "visit"}),
    "sizes": frozenset({"big", "small", "large", "huge", "giant", "little", "tiny", "mini"}),
    "foods": frozenset({"food", "snack", "lunch", "dinner", "breakfast", "meal", "apple", "banana", "sandwich", "biscuit", "bread", "cheese", "pizza"}),
    "family": frozenset({"mum", "dad", "mom", "mother", "father", "brother", "sister", "grandma", "grandpa", "nan", "pop", "family"}),
    "places": frozenset({"park", "shop", "school", "playground", "library", "beach", "pool", "outside", "inside", "home"}),
    "time": frozenset({"now", "later", "soon", "today", "tomorrow", "yesterday", "morning", "afternoon", "night", "tonight"}),
    "qualities": frozenset({"good", "bad", "great", "nice", "awesome", "terrible", "awful", "fine", "okay"}),
    "quantities": frozenset({"more", "some", "less", "all", "many", "much", "few", "lots"}),
    "communication": frozenset({"say", "tell", "talk", "speak", "ask", "call", "chat"}),
    "agreement": frozenset({"yes", "no", "yeah", "yep", "nope", "sure", "okay", "alright"}),
    "greetings": frozenset({"hello", "hi", "hey", "bye", "goodbye"}),
    "thanks": frozenset({"thanks", "thank", "thank you", "cheers", "ta"}),
}

TOPIC_TAXONOMY: dict[str, frozenset[str]] = {
    "school": frozenset({"school", "teacher", "class", "book", "pencil", "homework", "read", "write", "learn", "maths", "recess"}),
    "food": frozenset({"eat", "drink", "hungry", "thirsty", "water", "food", "snack", "lunch", "dinner", "breakfast", "juice", "milk", "apple"}),
    "family": frozenset({"mum", "dad", "mom", "brother", "sister", "grandma", "grandpa", "family", "baby"}),
    "play": frozenset({"play", "game", "toy", "ball", "fun", "park", "outside", "swing", "turn"}),
    "feelings": frozenset({"happy", "sad", "angry", "scared", "tired", "feel", "excited", "love", "hurt", "sick"}),
    "home": frozenset({"home", "bed", "bathroom", "toilet", "house", "room", "sleep", "tv", "kitchen"}),
    "help": frozenset({"help", "stop", "please", "break", "wait", "hurt", "need"}),
    "time": frozenset({"now", "later", "today", "tomorrow", "yesterday", "morning", "night", "time", "soon"}),
}
