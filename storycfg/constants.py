from typing import *

DEFAULT_START: str = 'Story'

# without an explicit max_depth, the depth bound of a search is
# DEPTH_PER_TOKEN * len(tokens) + DEPTH_MARGIN. derivations in the story
# grammar apply about three productions per token
DEPTH_PER_TOKEN: int = 12
DEPTH_MARGIN: int = 20

# frames reserved on top of the depth bound when the recursion limit is raised
RECURSION_MARGIN: int = 50

PUNCTUATION: Tuple[str] = ('.', ',', '!', '?')

NO_DERIVATION_MESSAGE: str = 'No derivation found.'
