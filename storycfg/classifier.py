import logging

from tqdm import tqdm
from typing import *
from dataclasses import dataclass
from collections import Counter

from .tokens import Token
from .tokenizer import Tokenizer
from .deriver import DerivationEngine, Derivation, NoDerivation
from .derivation_arguments import DerivationArguments
from .grammars.generator import get_story_metadata
from .grammars.story_grammar import build_grammar

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Classification:
	'''The tokens of a text and the result of deriving them.'''
	text: str
	tokens: Tuple[Token]
	result: Union[Derivation, NoDerivation]

	@property
	def valid(self) -> bool:
		return bool(self.result)

	@property
	def steps(self) -> Tuple[str]:
		'''The derivation trace, or the failure message as the only step.'''
		return self.result.steps if self.valid else (str(self.result),)

	def metadata(self) -> Dict:
		'''Properties of the derivation tree. Empty if there is no derivation.'''
		return get_story_metadata(self.result.tree()) if self.valid else {}

def from_arguments(args: DerivationArguments) -> Tuple[Tokenizer, DerivationEngine]:
	'''Build a tokenizer and an engine configured by args.'''
	grammar = build_grammar(start=args.start)
	return Tokenizer(), DerivationEngine(grammar, max_depth=args.max_depth)

def classify(
	text: str,
	tokenizer: Tokenizer = None,
	engine: DerivationEngine = None,
	cancel: 'threading.Event' = None,
) -> Classification:
	'''
	Tokenize a text and derive its tokens.

	:param text: str: the text to classify
	:param tokenizer: Tokenizer: defaults to one using the built-in vocabulary
	:param engine: DerivationEngine: defaults to one using the built-in grammar
	:param cancel: passed to engine.derive
	:returns Classification: the text, its tokens, and the derivation result
	'''
	tokenizer 	= Tokenizer() if tokenizer is None else tokenizer
	engine 		= DerivationEngine() if engine is None else engine

	tokens 	= tuple(tokenizer.tokenize(text))
	result 	= engine.derive(tokens, cancel=cancel)

	return Classification(text=text, tokens=tokens, result=result)

def classify_all(
	texts: Iterable[str],
	tokenizer: Tokenizer = None,
	engine: DerivationEngine = None,
	progress: bool = False,
) -> List[Classification]:
	'''
	Classify each of texts in order. The tokenizer and engine are shared,
	each text gets its own search.

	:param progress: bool: whether to show a progress bar
	'''
	tokenizer 	= Tokenizer() if tokenizer is None else tokenizer
	engine 		= DerivationEngine() if engine is None else engine

	return [classify(text, tokenizer, engine) for text in tqdm(texts, disable=not progress)]

def classify_with_arguments(texts: Iterable[str], args: DerivationArguments) -> List[Classification]:
	'''Classify texts with a tokenizer, engine, and progress bar configured by args.'''
	tokenizer, engine = from_arguments(args)
	return classify_all(texts, tokenizer, engine, progress=args.progress)

def summarize(classifications: Sequence[Classification]) -> Dict:
	'''
	Summarize classification results.

	:returns summary: a dictionary recording
					  - the number of texts (total)
					  - the number with and without a derivation (valid, invalid)
					  - the proportion with a derivation (prop_valid), None if there are no texts
					  - the number of failures for each reason (failures)
	'''
	total 	= len(classifications)
	valid 	= len([c for c in classifications if c.valid])
	reasons = Counter(c.result.reason.value for c in classifications if not c.valid)

	summary = {
		'total'		: total,
		'valid'		: valid,
		'invalid'	: total - valid,
		'prop_valid': valid/total if total else None,
		'failures'	: dict(reasons),
	}

	if reasons:
		logger.info(f'{total - valid} of {total} texts have no derivation: {dict(reasons)}')

	return summary
