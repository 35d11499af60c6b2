import logging

from typing import *

from .tokens import Token, Category
from .constants import PUNCTUATION
from .grammars.vocabulary import (
	default_vocabulary,
	MULTI_WORD_CATEGORIES,
	SINGLE_WORD_CATEGORIES,
)

logger = logging.getLogger(__name__)

def split_punctuation(word: str) -> Tuple[str, List[str]]:
	'''
	Split trailing punctuation marks off a word.

	:param word: str: a whitespace-delimited chunk of text
	:returns: the word without its trailing marks, and the marks in surface order.
			  e.g. 'forest?!' -> ('forest', ['?', '!'])
	'''
	end = len(word)
	while end > 0 and word[end-1] in PUNCTUATION:
		end -= 1

	return word[:end], list(word[end:])

class Tokenizer():
	'''
	Segments text into tokens using a vocabulary.

	Multi-word phrases are matched before single words, so that e.g.
	'at the castle' is one Location token rather than a preposition,
	a determiner and a noun.
	'''
	def __init__(self, vocabulary: Mapping[Category, Sequence[str]] = None):
		vocabulary = default_vocabulary() if vocabulary is None else vocabulary

		# phrases of two or more words for each multi-word category,
		# longest first. sorted() is stable, so equally long phrases
		# keep their vocabulary order
		self.phrases = {
			category: sorted(
				[tuple(entry.lower().split()) for entry in vocabulary.get(category, ()) if len(entry.split()) > 1],
				key=len,
				reverse=True,
			)
			for category in MULTI_WORD_CATEGORIES
		}

		# the first category in priority order claims a word
		self.categories = {}
		for category in SINGLE_WORD_CATEGORIES:
			for entry in vocabulary.get(category, ()):
				self.categories.setdefault(entry.lower(), category)

	def tokenize(self, text: str) -> List[Token]:
		'''
		Convert text into a list of tokens. Never fails: words that are
		not in the vocabulary become Unknown tokens.
		'''
		words 	= text.strip().split()
		tokens 	= []
		i 		= 0
		while i < len(words):
			match = self.match_phrase(words, i)
			if match is not None:
				category, n_words = match
				chunk = words[i:i+n_words]
				i += n_words
			else:
				category, chunk = None, words[i:i+1]
				i += 1

			last, marks = split_punctuation(chunk[-1])
			value = ' '.join(chunk[:-1] + [last])

			if value:
				if category is None:
					category = self.classify(value)

				tokens.append(Token(value, category))

			tokens.extend(Token(mark, Category.PUNCTUATION) for mark in marks)

		return tokens

	def match_phrase(self, words: List[str], i: int) -> Optional[Tuple[Category, int]]:
		'''
		Find a multi-word phrase starting at words[i].

		:param words: List[str]: the whitespace-delimited words of the text
		:param i: int: the position to match at
		:returns: the category and the number of words of the longest phrase
				  in the first category that has a match, or None.
		'''
		for category in MULTI_WORD_CATEGORIES:
			for phrase in self.phrases[category]:
				if i + len(phrase) > len(words):
					continue

				candidate = [word.lower() for word in words[i:i+len(phrase)]]

				# only the last word of a phrase may carry punctuation
				candidate[-1] = split_punctuation(candidate[-1])[0]
				if tuple(candidate) == phrase:
					return category, len(phrase)

		return None

	def classify(self, word: str) -> Category:
		'''Get the category of a single word.'''
		category = self.categories.get(word.lower(), Category.UNKNOWN)
		if category is Category.UNKNOWN:
			logger.debug(f'"{word}" is not in the vocabulary')

		return category

_default_tokenizer = None

def tokenize(text: str) -> List[Token]:
	'''Tokenize text with the default vocabulary.'''
	global _default_tokenizer
	if _default_tokenizer is None:
		_default_tokenizer = Tokenizer()

	return _default_tokenizer.tokenize(text)
