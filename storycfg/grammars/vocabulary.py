from types import MappingProxyType
from typing import *

from ..tokens import Category
from ..constants import PUNCTUATION

# entries are kept in insertion order: the grammar turns each one
# into a production, and production order decides which derivation
# is found first
VOCABULARY: Dict[Category, Tuple[str]] = {
	Category.DETERMINER: (
		'the', 'a', 'an', 'my', 'her', 'his',
	),
	Category.ADJECTIVE: (
		'brave', 'old', 'young', 'rusty', 'enchanted', 'mighty', 'dark',
	),
	Category.NOUN: (
		'hero', 'wizard', 'knight', 'dragon', 'princess',
		'treasure', 'cave', 'sword', 'castle', 'villager',
		'horse', 'forest', 'moon', 'sun', 'gate',
	),
	Category.VERB: (
		'fights', 'searches', 'rescues', 'discovers', 'rides',
		'finds', 'opens', 'calls', 'holds', 'protects',
		'rises', 'sleeps', 'searches for', 'looks for', 'runs away',
	),
	Category.PREPOSITION: (
		'in', 'on', 'at', 'under', 'inside', 'near', 'above', 'beside',
	),
	Category.ADVERBIAL: (
		'quickly', 'silently', 'carefully',
		'at dawn', 'at night', 'in silence', 'once again',
	),
	Category.LOCATION: (
		'castle', 'mountain', 'river', 'cave', 'forest',
		'in the dark forest', 'in the forest', 'at the castle', 'inside the castle',
		'in the cave', 'near the river', 'on the mountain',
	),
	Category.CONDITION: (
		'brave', 'clever', 'unlocked', 'sleeps',
		'when the sun sets', 'as night falls', 'if the gate is unlocked',
	),
	Category.RELATIVE_CLAUSE: (
		'who',
	),
	Category.CONJUNCTION: (
		'and', 'but', 'then', 'while',
	),
	Category.PUNCTUATION: PUNCTUATION,
}

# scanned before single words, in this order
MULTI_WORD_CATEGORIES: Tuple[Category] = (
	Category.LOCATION,
	Category.ADVERBIAL,
	Category.CONDITION,
	Category.VERB,
)

# priority order for classifying a single word
SINGLE_WORD_CATEGORIES: Tuple[Category] = (
	Category.DETERMINER,
	Category.ADJECTIVE,
	Category.NOUN,
	Category.VERB,
	Category.PREPOSITION,
	Category.ADVERBIAL,
	Category.LOCATION,
	Category.CONDITION,
	Category.RELATIVE_CLAUSE,
	Category.CONJUNCTION,
)

def default_vocabulary() -> Mapping[Category, Tuple[str]]:
	'''Return a read-only view of the built-in vocabulary.'''
	return MappingProxyType(VOCABULARY)
