import sys
import logging

from enum import Enum
from typing import *
from dataclasses import dataclass

from nltk import CFG, Tree, Nonterminal, Production
from nltk.grammar import is_nonterminal

from .tokens import Token
from .constants import DEPTH_PER_TOKEN, DEPTH_MARGIN, RECURSION_MARGIN, NO_DERIVATION_MESSAGE
from .grammars.story_grammar import build_grammar, minimum_yields

logger = logging.getLogger(__name__)

# a sentential form: nonterminals still to expand and terminal strings
Form = Tuple[Union[Nonterminal, str], ...]

class Outcome(Enum):
	'''How a search, or one branch of it, ended.'''
	SUCCESS 		= 'success'
	FAIL 			= 'fail'
	DEPTH_EXCEEDED 	= 'depth exceeded'
	CANCELLED 		= 'cancelled'

def format_form(form: Form, tokens: Sequence[Token] = ()) -> str:
	'''
	Render a sentential form as a string.

	Nonterminals render as <Name>. Terminals in the leading run of the form
	render as the surface text of the tokens they matched, other terminals
	as the grammar's literal.
	'''
	rendered = []
	leading  = True
	for i, symbol in enumerate(form):
		if is_nonterminal(symbol):
			leading = False
			rendered.append(f'<{symbol.symbol()}>')
		elif leading and i < len(tokens):
			rendered.append(tokens[i].value)
		else:
			rendered.append(symbol)

	return ' '.join(rendered)

@dataclass(frozen=True)
class Derivation:
	'''A successful leftmost derivation of a token sequence.'''
	tokens: Tuple[Token]
	steps: Tuple[str]
	productions: Tuple[Production]

	def __bool__(self) -> bool:
		return True

	def tree(self) -> Tree:
		'''
		Rebuild the derivation as a tree. The productions of a leftmost
		derivation are a preorder walk of its tree, and the terminals
		are visited left to right, so the leaves are the token values.
		'''
		productions = iter(self.productions)
		values 		= iter(token.value for token in self.tokens)

		def build() -> Tree:
			production = next(productions)
			children = [
				build() if is_nonterminal(symbol) else next(values)
				for symbol in production.rhs()
			]
			return Tree(production.lhs(), children)

		return build()

@dataclass(frozen=True)
class NoDerivation:
	'''No sequence of productions reproduces the tokens.'''
	reason: Outcome = Outcome.FAIL
	message: str = NO_DERIVATION_MESSAGE

	def __bool__(self) -> bool:
		return False

	def __str__(self) -> str:
		return self.message

class _Search():
	'''State for a single derive call. Never shared between calls.'''
	def __init__(
		self,
		grammar: CFG,
		yields: Dict[Nonterminal, int],
		tokens: Sequence[Token],
		max_depth: int,
		cancel: 'threading.Event' = None,
	):
		self.grammar 	= grammar
		self.yields 	= yields
		self.tokens 	= tokens
		self.targets 	= [token.value.lower() for token in tokens]
		self.max_depth 	= max_depth
		self.cancel 	= cancel
		self.visited 	= set()
		self.forms 		= []
		self.applied 	= []

	def expand(self, form: Form, depth: int) -> Outcome:
		'''
		Expand the leftmost nonterminal of form with each of its productions
		in order, until one of them leads to the tokens.

		On success, self.forms and self.applied hold the derivation.
		'''
		if self.cancel is not None and self.cancel.is_set():
			return Outcome.CANCELLED

		if depth > self.max_depth:
			return Outcome.DEPTH_EXCEEDED

		index = next((i for i, symbol in enumerate(form) if is_nonterminal(symbol)), None)
		if index is None:
			return Outcome.SUCCESS if self.matches(form) else Outcome.FAIL

		signature = tuple(symbol if is_nonterminal(symbol) else symbol.lower() for symbol in form)
		if signature in self.visited:
			return Outcome.FAIL

		self.visited.add(signature)

		productions = self.grammar.productions(lhs=form[index])
		if not productions:
			logger.debug(f'No productions for <{form[index].symbol()}>')
			return Outcome.FAIL

		result = Outcome.FAIL
		for production in productions:
			expanded = form[:index] + production.rhs() + form[index+1:]
			if not self.viable(expanded):
				continue

			self.forms.append(expanded)
			self.applied.append(production)

			outcome = self.expand(expanded, depth + 1)
			if outcome is Outcome.SUCCESS:
				return outcome

			self.forms.pop()
			self.applied.pop()

			if outcome is Outcome.CANCELLED:
				return outcome

			if outcome is Outcome.DEPTH_EXCEEDED:
				result = outcome

		# a form cut off by the depth bound may still succeed
		# when it is reached on a shorter path
		if result is Outcome.DEPTH_EXCEEDED:
			self.visited.discard(signature)

		return result

	def viable(self, form: Form) -> bool:
		'''
		Whether form can still derive the tokens.

		The leading terminals must match the start of the tokens, and the
		terminals in form plus the fewest terminals its nonterminals can
		derive must not outnumber the tokens.
		'''
		n_tokens = len(self.targets)
		needed 	 = 0
		leading  = True
		for i, symbol in enumerate(form):
			if is_nonterminal(symbol):
				leading = False
				if not symbol in self.yields:
					return False

				needed += self.yields[symbol]
			else:
				if leading and (i >= n_tokens or symbol.lower() != self.targets[i]):
					return False

				needed += 1

			if needed > n_tokens:
				return False

		return True

	def matches(self, form: Form) -> bool:
		return [symbol.lower() for symbol in form] == self.targets

def _fit_recursion_limit(depth: int) -> None:
	'''Raise the recursion limit so that depth more frames fit on top of the current stack.'''
	frame, in_use = sys._getframe(), 0
	while frame is not None:
		in_use += 1
		frame = frame.f_back

	needed = in_use + depth + RECURSION_MARGIN
	if needed > sys.getrecursionlimit():
		logger.debug(f'Raising the recursion limit from {sys.getrecursionlimit()} to {needed}')
		sys.setrecursionlimit(needed)

class DerivationEngine():
	'''
	Searches for a leftmost derivation of a token sequence.

	The search is a depth-first walk over leftmost expansions, trying
	productions in grammar order and returning the first derivation found.
	Expansions whose terminals cannot match the tokens are pruned, forms
	already seen in the same search are skipped, and the depth is bounded.

	The grammar is only read, so one engine can serve many derive calls,
	including concurrent ones.
	'''
	def __init__(
		self,
		grammar: CFG = None,
		max_depth: int = None
	):
		'''
		:param grammar: CFG: defaults to the story grammar
		:param max_depth: int: the most expansions on one search path. if None,
							   the bound grows with the number of tokens derived
		'''
		if max_depth is not None and max_depth < 1:
			raise ValueError(f'`max_depth` should be at least 1, not {max_depth}.')

		self.grammar 	= build_grammar() if grammar is None else grammar
		self.max_depth 	= max_depth
		self.yields 	= minimum_yields(self.grammar)

	def depth_bound(self, tokens: Sequence[Token]) -> int:
		'''The depth bound of a search for tokens.'''
		if self.max_depth is not None:
			return self.max_depth

		return DEPTH_PER_TOKEN * len(tokens) + DEPTH_MARGIN

	def derive(
		self,
		tokens: Sequence[Token],
		cancel: 'threading.Event' = None,
	) -> Union[Derivation, NoDerivation]:
		'''
		Derive tokens from the grammar's start symbol.

		:param tokens: Sequence[Token]: the tokens to derive
		:param cancel: threading.Event: if given and set, the search stops
		:returns: a Derivation with the trace of sentential forms on success,
				  and a NoDerivation otherwise. Never raises for failed searches.
		'''
		tokens 	= tuple(tokens)
		bound 	= self.depth_bound(tokens)
		search 	= _Search(self.grammar, self.yields, tokens, bound, cancel)
		start 	= (self.grammar.start(),)

		if search.viable(start):
			# one frame per expansion
			_fit_recursion_limit(bound)
			outcome = search.expand(start, 0)
		else:
			outcome = Outcome.FAIL

		if outcome is Outcome.SUCCESS:
			forms = [start] + search.forms
			return Derivation(
				tokens=tokens,
				steps=tuple(format_form(form, tokens) for form in forms),
				productions=tuple(search.applied),
			)

		if outcome is Outcome.DEPTH_EXCEEDED:
			logger.warning(
				f'Derivation of "{" ".join(token.value for token in tokens)}" '
				f'reached the depth bound ({bound}) without succeeding.'
			)
		else:
			logger.debug(f'No derivation found ({outcome.value}).')

		return NoDerivation(reason=outcome)
