"""Unit tests for storycfg.classifier and storycfg.derivation_arguments

"""
import unittest

from unittest import mock

from nltk import Nonterminal

from storycfg.tokens import Category
from storycfg.tokenizer import Tokenizer
from storycfg.deriver import DerivationEngine, Outcome
from storycfg.classifier import (
	Classification,
	classify,
	classify_all,
	classify_with_arguments,
	summarize,
	from_arguments,
)
from storycfg.derivation_arguments import DerivationArguments

class TestClassifier(unittest.TestCase):
	@classmethod
	def setUpClass(cls):
		cls.tokenizer 	= Tokenizer()
		cls.engine 		= DerivationEngine()

	def test_valid(self):
		c = classify('A wizard discovers a cave while the moon rises.', self.tokenizer, self.engine)
		self.assertIsInstance(c, Classification)
		self.assertTrue(c.valid)
		self.assertEqual(c.tokens[-1].category, Category.PUNCTUATION)
		self.assertEqual(c.steps[-1], 'A wizard discovers a cave while the moon rises .')
		self.assertEqual(c.metadata()['compound_sentences'], 1)

	def test_invalid(self):
		c = classify('The the the the the knight', self.tokenizer, self.engine)
		self.assertFalse(c.valid)
		self.assertEqual(c.steps, ('No derivation found.',))
		self.assertEqual(c.metadata(), {})

	def test_defaults(self):
		self.assertTrue(classify('The hero fights.').valid)

	def test_classify_all(self):
		texts = [
			'The hero fights.',
			'The goblin fights.',
			'The dragon sleeps in the cave.',
		]
		results = classify_all(texts, self.tokenizer, self.engine)
		self.assertEqual([c.text for c in results], texts)
		self.assertEqual([c.valid for c in results], [True, False, True])

		summary = summarize(results)
		self.assertEqual(summary['total'], 3)
		self.assertEqual(summary['valid'], 2)
		self.assertEqual(summary['invalid'], 1)
		self.assertAlmostEqual(summary['prop_valid'], 2/3)
		self.assertEqual(summary['failures'], {Outcome.FAIL.value: 1})

	def test_classify_all_progress(self):
		results = classify_all(['The hero fights.'], self.tokenizer, self.engine, progress=True)
		self.assertTrue(results[0].valid)

	def test_summarize_empty(self):
		self.assertEqual(
			summarize([]),
			{'total': 0, 'valid': 0, 'invalid': 0, 'prop_valid': None, 'failures': {}}
		)

	def test_from_arguments(self):
		tokenizer, engine = from_arguments(DerivationArguments(start='Sentence', max_depth=100))
		self.assertEqual(engine.max_depth, 100)
		self.assertEqual(engine.grammar.start(), Nonterminal('Sentence'))
		self.assertEqual(
			classify('The hero fights.', tokenizer, engine).steps[0],
			'<Sentence>'
		)

	def test_classify_with_arguments(self):
		texts = ['The hero fights.', 'The goblin fights.']
		for progress in [True, False]:
			with mock.patch('storycfg.classifier.tqdm', side_effect=lambda texts, disable: texts) as bar:
				results = classify_with_arguments(texts, DerivationArguments(progress=progress))

			bar.assert_called_once_with(texts, disable=not progress)
			self.assertEqual([c.valid for c in results], [True, False])

class TestDerivationArguments(unittest.TestCase):
	def test_defaults(self):
		args = DerivationArguments()
		self.assertEqual(args.start, 'Story')
		self.assertIsNone(args.max_depth)
		self.assertFalse(args.progress)

	def test_invalid_start(self):
		with self.assertRaises(ValueError):
			DerivationArguments(start='Noun')

	def test_invalid_max_depth(self):
		with self.assertRaises(ValueError):
			DerivationArguments(max_depth=0)

		with self.assertRaises(ValueError):
			DerivationArguments(max_depth=-3)

if __name__ == '__main__':
	unittest.main()
