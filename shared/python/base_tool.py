"""
GeoUTM — Shared Base Tool
==========================
File-to-file tool base class and the console logging setup shared by the
batch converter and the ``utm-convert`` command line.

``GeoTool.run()`` fixes the order validate → process → report.  The CSV
batch converter fills in the first two steps; a failure in either stops
the run before anything is reported.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

# Root of the logger tree; modules log to "geoutm.<module>".
logger = logging.getLogger("geoutm")


def configure_logging(verbose: bool = False) -> None:
    """Attach one console handler to the ``geoutm`` logger tree.

    Repeated calls only change the level: DEBUG when *verbose*, else INFO.
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                fmt="[%(asctime)s] %(levelname)-8s %(name)s — %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


class GeoTool(ABC):
    """Base class for tools that read one coordinate file and write another.

    Attributes:
        input_path: File the tool reads.
        output_path: File the tool writes; its directory is created on
            validation if missing.
        verbose: Log conversion traces at DEBUG level.

    Example::

        tool = BatchUTMConverter(
            input_path=Path("points.csv"),
            output_path=Path("points_utm.csv"),
            config=BatchConfig(direction="to_utm"),
        )
        tool.run()
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        *,
        verbose: bool = False,
    ) -> None:
        self.input_path: Path = Path(input_path)
        self.output_path: Path = Path(output_path)
        self.verbose: bool = verbose

        configure_logging(self.verbose)

    @abstractmethod
    def validate_inputs(self) -> None:
        """Raise :class:`~shared.python.exceptions.InputValidationError` for
        a missing file, unknown option or absent column."""

    @abstractmethod
    def process(self) -> None:
        """Convert the input file and write the output file."""

    def run(self) -> None:
        """Validate, process, then log the elapsed time.

        Errors from either step propagate unchanged.
        """
        logger.info("Starting %s", self.__class__.__name__)
        start = time.perf_counter()

        self.validate_inputs()
        self.process()

        self._report_success(time.perf_counter() - start)

    def _report_success(self, elapsed: float) -> None:
        logger.info(
            "%s completed in %.2fs → %s",
            self.__class__.__name__,
            elapsed,
            self.output_path,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"input_path={self.input_path!r}, "
            f"output_path={self.output_path!r})"
        )
