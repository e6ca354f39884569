from .datatypes import IndexWidth
from .datatypes import InputKind
from .datatypes import IntegerSequence
from .datatypes import PipelineConfig
from .datatypes import Sequence
from .datatypes import SuffixArray

from .errors import ConstructionError
from .errors import DriverError
from .errors import FormatError

from .io import load_dna
from .io import load_input
from .io import load_integer
from .io import load_text
from .io import write_integer_file

from .pipeline import run

from .serialize import read_suffix_array
from .serialize import write_suffix_array

from .suffix_array import build_int_sa
from .suffix_array import build_text_sa
from .suffix_array import create_suffix_array
from .suffix_array import is_suffix_array

from .utils import setup_logger

from .width import select_width

__version__ = "0.1.0"
