from .tokens import Token, Category, Phrase
from .tokenizer import Tokenizer, tokenize
from .deriver import DerivationEngine, Derivation, NoDerivation, Outcome
from .classifier import Classification, classify, classify_all, classify_with_arguments, summarize
from .derivation_arguments import DerivationArguments
