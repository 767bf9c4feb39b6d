"""
Page split processor.

Runs the blank-band splitter over a list of input images, one at a time,
and writes every piece to the output directory.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from pagesplit.config import Settings, settings as default_settings
from pagesplit.services.output_service import OutputService, OutputSpec, index_width
from pagesplit.splitting import BlankSpaceSplitter, NoBlankSpace, SplitResult
from pagesplit.utils.image_io import image_extension, load_image, save_image

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Outcome of splitting one input file."""

    source: Path
    """Input image path."""

    file_index: int
    """Position of the file in the run."""

    outputs: list[Path]
    """Written pieces, top to bottom."""

    boundaries: list[tuple[int, int]]
    """Planned (y_start, y_end) of each piece."""

    original_size: tuple[int, int]
    """Source image size (width, height)."""

    metadata: dict = field(default_factory=dict)
    """Additional split metadata."""

    @property
    def num_pieces(self) -> int:
        return len(self.outputs)


class PageSplitProcessor:
    """
    Splits input images and writes their pieces.

    Files are processed sequentially. The first error stops the run;
    pieces already written are kept.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the processor.

        Args:
            settings: Run settings. Uses the module-level settings if None.

        Raises:
            InvalidRange: If the configured blank range is reversed or empty.
        """
        self.settings = settings or default_settings
        self._splitter = BlankSpaceSplitter(self.settings.splitting.to_split_config())
        self._output = OutputService(self.settings.output_dir)

    def run(self, input_paths: Iterable[Union[Path, str]]) -> list[FileReport]:
        """
        Split every input image into the output directory.

        The output directory is prepared once, before the first file.

        Args:
            input_paths: Images to split, in order.

        Returns:
            One FileReport per input file.
        """
        paths = [Path(p) for p in input_paths]
        self._output.prepare(keep=paths)

        file_width = index_width(len(paths))
        reports = []
        for file_index, path in enumerate(paths):
            reports.append(self.process_file(path, file_index, file_width))

        total = sum(r.num_pieces for r in reports)
        logger.info(f"Wrote {total} pieces from {len(reports)} files to {self._output.output_dir}")
        return reports

    def process_file(
        self,
        path: Path,
        file_index: int,
        file_width: int = 2,
    ) -> FileReport:
        """
        Split one image and write its pieces.

        Args:
            path: Input image path.
            file_index: Index of the file in the run, used in filenames.
            file_width: Zero-pad width of the file index.

        Returns:
            FileReport describing the written pieces.

        Raises:
            DecodeError: If the image cannot be read.
            InvalidWindow: If the image is too short for the smoothing window.
            NoBlankSpace: If a piece cannot be cut on a blank row.
            EncodeError: If a piece cannot be written.
        """
        image = load_image(path)

        try:
            result = self._splitter.split(image)
        except NoBlankSpace as e:
            raise NoBlankSpace(e.y_start, e.y_end, path=path) from e

        outputs = self._write_pieces(result, file_index, file_width, self._extension_for(path))

        logger.info(f"{path}: {result.num_chunks} pieces")
        return FileReport(
            source=path,
            file_index=file_index,
            outputs=outputs,
            boundaries=result.plan.boundaries,
            original_size=result.original_size,
            metadata=result.metadata,
        )

    def _write_pieces(
        self,
        result: SplitResult,
        file_index: int,
        file_width: int,
        extension: str,
    ) -> list[Path]:
        """Save every piece of a split result."""
        piece_width = index_width(result.num_chunks)
        outputs = []

        for chunk, interval in zip(result.chunks, result.plan):
            spec = OutputSpec(
                file_index=file_index,
                piece_index=chunk.index,
                extension=extension,
                file_width=file_width,
                piece_width=piece_width,
            )
            out_path = save_image(chunk.image, self._output.output_path(spec))
            logger.info(f"{out_path}: {interval.y_start}-{interval.y_end}")
            outputs.append(out_path)

        return outputs

    def _extension_for(self, path: Path) -> str:
        """Output extension: the override if set, else the source extension."""
        return self.settings.output_extension or image_extension(path) or "png"
