import logging

from typing import *

from nltk import CFG, Nonterminal, Production
from nltk.grammar import is_nonterminal

from ..tokens import Category, nonterminal
from ..constants import DEFAULT_START
from .vocabulary import default_vocabulary

logger = logging.getLogger(__name__)

# productions for each left-hand side are tried in the order they are listed here
STRUCTURAL_RULES = """
	Story -> Sentence Story | Sentence

	Sentence -> SimpleSentence Punctuation | CompoundSentence Punctuation

	CompoundSentence -> SimpleSentence Conjunction SimpleSentence
	CompoundSentence -> CompoundSentence Conjunction SimpleSentence

	SimpleSentence -> Subject VerbPhrase Extra | Subject VerbPhrase

	Subject -> NounPhrase
	Object -> NounPhrase

	NounPhrase -> Determiner AdjectiveList Noun
	NounPhrase -> Determiner AdjectiveList Noun RelativePhrase
	NounPhrase -> AdjectiveList Noun

	RelativePhrase -> RelativeClause VerbPhrase

	AdjectiveList -> Adjective AdjectiveList
	AdjectiveList ->

	VerbPhrase -> Verb Object | Verb Location | Verb Adverbial | Verb
	VerbPhrase -> VerbPhrase Conjunction VerbPhrase

	Extra -> Location | Condition | Adverbial
"""

# added after the single-word conjunctions
EXTRA_LEXICAL_RULES = """
	Conjunction -> 'and' 'then'
"""

def lexical_productions(vocabulary: Mapping[Category, Sequence[str]]) -> List[Production]:
	'''
	Turn each vocabulary entry into a production from its category.

	:param vocabulary: a mapping from categories to their entries
	:returns: one single-terminal production per entry, grouped by category
			  in vocabulary order. multi-word entries stay a single terminal.
	'''
	return [
		Production(nonterminal(category), [entry])
		for category, entries in vocabulary.items()
			if not category is Category.UNKNOWN
		for entry in entries
	]

def build_grammar(
	vocabulary: Mapping[Category, Sequence[str]] = None,
	start: str = DEFAULT_START,
) -> CFG:
	'''
	Build the story grammar.

	:param vocabulary: the entries to generate lexical productions from.
					   defaults to the built-in vocabulary.
	:param start: str: the name of the start symbol
	:returns CFG: the structural rules followed by the lexical rules
	'''
	vocabulary 	= default_vocabulary() if vocabulary is None else vocabulary
	productions = (
		CFG.fromstring(STRUCTURAL_RULES).productions() +
		lexical_productions(vocabulary) +
		CFG.fromstring(EXTRA_LEXICAL_RULES).productions()
	)

	grammar = CFG(Nonterminal(start), productions, calculate_leftcorners=False)
	if not grammar.productions(lhs=grammar.start()):
		raise ValueError(f'The grammar has no productions for the start symbol "{start}".')

	logger.info(f'Built grammar with {len(productions)} productions starting from <{start}>')

	return grammar

def minimum_yields(grammar: CFG) -> Dict[Nonterminal, int]:
	'''
	Get the smallest number of terminals each nonterminal can derive.

	:param grammar: CFG: the grammar to measure
	:returns: a dict from nonterminals to their minimum yield.
			  nonterminals that cannot derive any terminal string are left out.
	'''
	yields = {}
	changed = True
	while changed:
		changed = False
		for production in grammar.productions():
			total = 0
			for symbol in production.rhs():
				if not is_nonterminal(symbol):
					total += 1
				elif symbol in yields:
					total += yields[symbol]
				else:
					total = None
					break

			if total is not None and total < yields.get(production.lhs(), total + 1):
				yields[production.lhs()] = total
				changed = True

	return yields
