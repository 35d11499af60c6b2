from .vocabulary import default_vocabulary, VOCABULARY
from .story_grammar import build_grammar, minimum_yields
