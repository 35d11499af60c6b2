from typing import *
from dataclasses import field
from dataclasses import dataclass

from .tokens import Phrase
from .constants import DEFAULT_START

@dataclass
class DerivationArguments:
	"""Arguments pertaining to how sentences are tokenized and derived."""
	start: str = field(
		default=DEFAULT_START,
		metadata={"help": "The nonterminal derivations start from (e.g., Story or Sentence)."}
	)

	max_depth: Optional[int] = field(
		default=None,
		metadata={
			"help": "The maximum number of expansions on one search path. Searches that reach "
			"this bound fail rather than recursing further. If not set, the bound grows "
			"with the number of tokens."
		},
	)

	progress: bool = field(
		default=False,
		metadata={"help": "Whether to show a progress bar when classifying many texts."}
	)

	def __post_init__(self):
		if not self.start in [phrase.value for phrase in Phrase]:
			raise ValueError(
				f"`start` should be one of {', '.join(phrase.value for phrase in Phrase)}, "
				f"not {self.start!r}."
			)

		if self.max_depth is not None and self.max_depth < 1:
			raise ValueError("`max_depth` should be at least 1.")
