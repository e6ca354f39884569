import logging
from typing import Optional

from .datatypes import InputKind, PipelineConfig, Sequence, SuffixArray
from .io import load_input
from .serialize import write_suffix_array
from .suffix_array import build_int_sa, build_text_sa
from .width import select_width

_logger = logging.getLogger(__name__)


def run(
    config: PipelineConfig, logger: Optional[logging.Logger] = None
) -> SuffixArray:
    """Load the input, build its suffix array and save it.

    Every error is logged together with the failing stage ("load",
    "construct" or "write") and re-raised. Nothing is written if the
    construction fails.

    Args:
      config:
        Input/output paths, input kind and number of threads.
      logger:
        Where to send diagnostics. Defaults to the module logger.
    Returns:
      Return the suffix array that was saved.
    """
    logger = logger or _logger
    logger.info(f"input_types: {config.input_kind.value}")
    logger.info(f"file : {config.input_path}")

    stage = "load"
    try:
        sequence = load_input(
            config.input_path, config.input_kind, logger=logger
        )

        stage = "construct"
        if isinstance(sequence, Sequence):
            width = select_width(len(sequence))
            suffix_array = build_text_sa(
                sequence, width, config.threads, logger=logger
            )
        else:
            assert config.input_kind == InputKind.INTEGER, config.input_kind
            width = select_width(len(sequence), sequence.max_token)
            suffix_array = build_int_sa(
                sequence, width, config.threads, logger=logger
            )

        stage = "write"
        write_suffix_array(config.output_path, suffix_array, logger=logger)
    except Exception as e:
        logger.error(f"{stage} failed: {e}")
        raise

    return suffix_array
