import re
import sys
import random

from typing import *

from nltk import CFG, Tree, Nonterminal, Production
from nltk.grammar import is_nonterminal

from ..constants import PUNCTUATION
from .story_grammar import minimum_yields

def generate(
	grammar: CFG,
	start: Nonterminal = None,
	depth: int = None,
	rng: random.Random = None,
) -> Tree:
	"""
	Generates a random tree from a CFG.

	:param grammar: The Grammar used to generate sentences.
	:param start: The Nonterminal from which to start generate sentences.
	:param depth: The depth after which each nonterminal is expanded with
				  its shortest production, so that the tree stays finite.
	:param rng: The random number generator to draw productions with.

	:return: A Tree whose leaves are the terminals of the generated sentence.
	"""
	start 	= grammar.start() if start is None else start
	depth 	= sys.maxsize if depth is None else depth
	rng 	= random.Random() if rng is None else rng
	yields 	= minimum_yields(grammar)

	# every other nonterminal reached is productive, since _generate skips the rest
	if not start in yields:
		raise ValueError(f'The grammar cannot generate any sentence from "{start}".')

	return _generate(grammar, start, depth, rng, yields)

def _generate(
	grammar: CFG,
	symbol: Nonterminal,
	depth: int,
	rng: random.Random,
	yields: Dict[Nonterminal, int],
) -> Tree:
	'''
	Expands symbol with a random production, and its children recursively.

	:param grammar: the grammar used to generate a sentence
	:param symbol: the nonterminal to expand
	:param depth: the remaining depth
	:param rng: the random number generator
	:param yields: the minimum yield of each productive nonterminal

	:return result: a Tree rooted at symbol
	'''
	# productions using a nonterminal that derives nothing would never finish
	productions = [
		prod for prod in grammar.productions(lhs=symbol)
			if all(not is_nonterminal(s) or s in yields for s in prod.rhs())
	]

	if depth > 0:
		production = rng.choice(productions)
	else:
		production = min(
			productions,
			key=lambda prod: (_production_yield(prod, yields), symbol in prod.rhs())
		)

	children = [
		_generate(grammar, s, depth - 1, rng, yields) if is_nonterminal(s) else s
		for s in production.rhs()
	]

	return Tree(symbol, children)

def _production_yield(production: Production, yields: Dict[Nonterminal, int]) -> int:
	return sum(yields[s] if is_nonterminal(s) else 1 for s in production.rhs())

def format_tree_string(t: Tree) -> str:
	"""
	Convert a tree to a string.
	:param t: Tree: an NLTK Tree
	:returns str: the leaves of the tree joined by spaces, with punctuation
				  attached to the preceding word and the first letter capitalized.
	"""
	t = ' '.join(t.leaves())
	t = re.sub(f' ([{re.escape("".join(PUNCTUATION))}])', r'\1', t)
	t = t.strip()
	t = t[:1].upper() + t[1:]

	return t

def get_labels(t: Tree) -> List[str]:
	'''
	Get the labels of an NLTK tree.

	:param t: Tree: the tree whose labels to return
	:returns labels: a list of the labels of the Tree as strings,
					 corresponding to the linear order in which they would be printed.
	'''
	labels = [t.label().symbol()]
	for child in t:
		if isinstance(child, Tree):
			labels.extend(get_labels(child))

	return labels

def get_pos_labels(t: Tree) -> List[str]:
	'''
	Get the part-of-speech labels from an NLTK tree.
	This returns only the labels of nodes directly above terminals.

	:param t: Tree: the tree whose labels to return
	:returns labels: a list of the lexical categories in the tree as strings,
					 corresponding to the linear order in which they would be printed.
	'''
	labels = []
	for child in t:
		if not isinstance(child, Tree):
			continue

		if len(child) and all(isinstance(c, str) for c in child):
			labels.append(child.label().symbol())
		else:
			labels.extend(get_pos_labels(child))

	return labels

def grep_next_subtree(
	t: Tree,
	expr: str
) -> Tree:
	"""
	Get the next subtree whose label matches the expr.
	:param t: Tree: the tree to search.
	:param expr: a regex to search when searching the tree
	:returns Tree: the next subtree in t whose label's symbol matches expr
	"""
	try:
		subt = next(t.subtrees(filter = lambda x: re.search(expr, x.label().symbol())))
	except StopIteration:
		subt = None

	return subt

def get_story_metadata(t: Tree) -> Dict:
	"""
	Gets metadata about a derivation tree of the story grammar.
	:param t: Tree: a tree rooted at any nonterminal of the story grammar
	:returns metadata: a dictionary recording the following properties of the tree:
					   - the number of sentences (sentences)
					   - how many of them are compound sentences (compound_sentences)
					   - the number of relative clauses (relative_clauses)
					   - the category of each extra, in order (extras)
					   - the PoS sequence, as a string (pos_seq)
	"""
	labels = get_labels(t)

	sentences = list(t.subtrees(filter = lambda x: x.label().symbol() == 'Sentence'))
	compound_sentences = [
		s for s in sentences
			if isinstance(s[0], Tree) and s[0].label().symbol() == 'CompoundSentence'
	]

	extras = [
		extra[0].label().symbol()
		for extra in t.subtrees(filter = lambda x: x.label().symbol() == 'Extra')
	]

	metadata = {
		'sentences'			: len(sentences),
		'compound_sentences': len(compound_sentences),
		'relative_clauses'	: labels.count('RelativePhrase'),
		'extras'			: extras,
		'pos_seq'			: '[' + '] ['.join(get_pos_labels(t)) + ']',
	}

	return metadata
