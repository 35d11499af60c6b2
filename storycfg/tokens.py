from enum import Enum
from typing import *
from dataclasses import dataclass

from nltk import Nonterminal

class Category(Enum):
	'''Lexical categories a token can be classified as.'''
	DETERMINER 		= 'Determiner'
	ADJECTIVE 		= 'Adjective'
	NOUN 			= 'Noun'
	VERB 			= 'Verb'
	PREPOSITION 	= 'Preposition'
	ADVERBIAL 		= 'Adverbial'
	LOCATION 		= 'Location'
	CONDITION 		= 'Condition'
	RELATIVE_CLAUSE = 'RelativeClause'
	CONJUNCTION 	= 'Conjunction'
	PUNCTUATION 	= 'Punctuation'
	UNKNOWN 		= 'Unknown'

class Phrase(Enum):
	'''Structural non-terminals of the story grammar.'''
	STORY 				= 'Story'
	SENTENCE 			= 'Sentence'
	SIMPLE_SENTENCE 	= 'SimpleSentence'
	COMPOUND_SENTENCE 	= 'CompoundSentence'
	SUBJECT 			= 'Subject'
	OBJECT 				= 'Object'
	NOUN_PHRASE 		= 'NounPhrase'
	VERB_PHRASE 		= 'VerbPhrase'
	RELATIVE_PHRASE 	= 'RelativePhrase'
	EXTRA 				= 'Extra'
	ADJECTIVE_LIST 		= 'AdjectiveList'

def nonterminal(tag: Union[Category, Phrase]) -> Nonterminal:
	'''
	Get the grammar symbol for a phrase or a lexical category.
	Lexical categories are pre-terminals: they expand to single vocabulary entries.
	'''
	if tag is Category.UNKNOWN:
		raise ValueError('Unknown is not a grammar symbol.')

	return Nonterminal(tag.value)

@dataclass(frozen=True)
class Token:
	'''A piece of surface text with its lexical category.'''
	value: str
	category: Category

	def __str__(self) -> str:
		return f'{self.value} <{self.category.value}>'
