# internals/define_config.py
"""User configuration dataclass and validation."""

# region imports
from __future__ import annotations

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    # Python 3.10
    import tomli as tomllib  # type: ignore[no-redef]

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import tomli_w  # For writing (no stdlib equivalent yet)

from slide_transitions.archive import Compression, SerializeOptions
from slide_transitions.internals.constants import DEFAULT_COMPRESSION_LEVEL
from slide_transitions.internals.paths import (
    resolve_path,
    user_configs_dir,
    user_output_dir,
)
from slide_transitions.pipelines.apply_transitions import TransitionOptions
from slide_transitions.processing.transition_catalog import (
    DEFAULT_SEQUENCE,
    TRANSITIONS,
    TransitionSequence,
)

# endregion

log = logging.getLogger("slide_transitions")


# region class UserConfig
@dataclass
class UserConfig:
    """All user-configurable settings for slide_transitions."""

    # region class fields

    # region Input/Output
    input_pptx: Optional[Path] = None

    # Folder for a timestamped output file; ignored when output_pptx is given
    output_folder: Optional[Path] = None
    # Exact output file path
    output_pptx: Optional[Path] = None
    # endregion

    # region Processing options
    # Transition ids from the catalog; the slide at position i gets sequence[i % len(sequence)]
    sequence: list[str] = field(default_factory=lambda: list(DEFAULT_SEQUENCE.ids))

    compression: Compression = Compression.DEFLATED
    compression_level: Optional[int] = DEFAULT_COMPRESSION_LEVEL

    verify_slide_xml: bool = False
    verify_output: bool = False
    # endregion

    # endregion

    # region post_init
    def __post_init__(self) -> None:
        """Convert string inputs of path fields into Path objects."""
        if self.input_pptx is not None:
            self.input_pptx = Path(self.input_pptx)
        if self.output_folder is not None:
            self.output_folder = Path(self.output_folder)
        if self.output_pptx is not None:
            self.output_pptx = Path(self.output_pptx)
        # A TOML file may give a single id as a plain string
        if isinstance(self.sequence, str):
            self.sequence = [self.sequence]
        elif isinstance(self.sequence, tuple):
            self.sequence = list(self.sequence)

    # endregion

    # region from_toml
    @classmethod
    def from_toml(cls, path: Path) -> UserConfig:
        """
        Load configuration from a TOML file.

        The TOML file should have flat key-value pairs matching the UserConfig field names.

        Example TOML:
            input_pptx = "~/decks/quarterly.pptx"
            sequence = ["morph", "push", "wipe"]
            compression = "deflated"
            compression_level = 9
            verify_output = true

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If TOML is invalid or contains invalid enum values
        """
        path = Path(path)
        if not path.exists():
            error_msg = f"Config file not found: {path}"
            log.error(error_msg)
            raise FileNotFoundError(error_msg)
        if path.is_dir():
            error_msg = f"This is a directory (folder), not a toml file: {path}"
            log.error(error_msg)
            raise ValueError(error_msg)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML syntax in {path}. Check for missing or mismatched quote marks."
            log.error(error_msg)
            raise ValueError(error_msg) from e
        except UnicodeDecodeError as e:
            error_msg = f"Could not decode {path} as UTF-8 text. Is it really a TOML file?"
            log.error(error_msg)
            raise ValueError(error_msg) from e
        except PermissionError as e:
            error_msg = f"We hit a permission error when trying to access {path}"
            log.error(error_msg)
            raise ValueError(error_msg) from e

        if not data:
            log.warning(
                f"Config toml file loaded as empty, so no UserConfig fields were set from: {path}."
            )

        valid_fields = {f.name for f in fields(cls)}
        unexpected = set(data.keys()) - valid_fields
        if unexpected:
            log.warning(
                f"Ignoring unexpected fields in TOML config: {', '.join(sorted(unexpected))}. "
                f"Check for typos. Valid fields: {', '.join(sorted(valid_fields))}"
            )
            data = {k: v for k, v in data.items() if k in valid_fields}

        if "compression" in data:
            data["compression"] = parse_compression(data["compression"])

        return cls(**data)

    # endregion

    # region get real Path objects from stored cfg values
    def get_input_pptx_file(self) -> Path | None:
        """Get the input pptx file path, or None if not specified."""
        if self.input_pptx:
            return resolve_path(self.input_pptx)
        return None

    def get_output_folder(self) -> Path:
        """Get the output folder, with fallback to default."""
        if self.output_folder:
            return resolve_path(self.output_folder)
        return user_output_dir()

    def get_output_pptx_file(self) -> Path | None:
        """Get the explicit output file path, or None to use a timestamped name in the output folder."""
        if self.output_pptx:
            return resolve_path(self.output_pptx)
        return None

    # endregion

    # region to_transition_options
    def to_transition_options(self) -> TransitionOptions:
        """Build the pipeline options this config describes."""
        return TransitionOptions(
            sequence=TransitionSequence(self.sequence),
            serialize=SerializeOptions(
                compression=self.compression, level=self.compression_level
            ),
            verify_slide_xml=self.verify_slide_xml,
            verify_output=self.verify_output,
        )

    # endregion

    # region save_toml
    def save_toml(self, path: Optional[Path] = None) -> None:
        """Save configuration to a TOML file, by default config.toml in the user's configs folder."""
        path = Path(path) if path is not None else user_configs_dir() / "config.toml"

        if path.exists() and path.is_dir():
            error_msg = f"Cannot save config: path is a directory, not a file: {path}."
            log.error(error_msg)
            raise ValueError(error_msg)

        path.parent.mkdir(parents=True, exist_ok=True)

        # TOML can't serialize None
        data = {k: v for k, v in self.config_to_dict().items() if v is not None}

        try:
            log.info(f"Attempting to save to {path}")
            with open(path, "wb") as f:
                tomli_w.dump(data, f)
            log.info(f"Saved toml config file at {path}")
        except PermissionError as e:
            error_msg = f"Permission denied writing to: {path}"
            log.error(error_msg)
            raise PermissionError(error_msg) from e
        except OSError as e:
            error_msg = f"Failed to write config file to {path}"
            log.error(error_msg)
            raise OSError(error_msg) from e

    # endregion

    # region config_to_dict
    def config_to_dict(self) -> dict[str, Any]:
        """Convert config to a TOML/JSON-serializable dict. Paths use forward slashes."""
        return {
            "input_pptx": self.input_pptx.as_posix() if self.input_pptx else None,
            "output_folder": (
                self.output_folder.as_posix() if self.output_folder else None
            ),
            "output_pptx": self.output_pptx.as_posix() if self.output_pptx else None,
            "sequence": list(self.sequence),
            "compression": self.compression.value,
            "compression_level": self.compression_level,
            "verify_slide_xml": self.verify_slide_xml,
            "verify_output": self.verify_output,
        }

    # endregion

    # region instance validation methods
    def pre_run_check(self) -> None:
        """
        Validate everything needed for a pipeline run.
        Combines intrinsic and external validation in one place.
        """
        self.validate()

        input_path = self.get_input_pptx_file()
        if input_path is None:
            raise ValueError(
                "No input pptx file specified. Please set input_pptx before running the pipeline."
            )
        if not input_path.exists():
            raise FileNotFoundError(f"Input pptx not found: {input_path}")
        if not input_path.is_file():
            raise ValueError(f"Not a file: {input_path}")

        output_file = self.get_output_pptx_file()
        if output_file is not None:
            if output_file.exists() and output_file.is_dir():
                raise ValueError(f"Output path is a directory, not a file: {output_file}")
            if output_file == input_path:
                raise ValueError(
                    f"Output file would overwrite the input file: {output_file}"
                )
        else:
            output_folder = self.get_output_folder()
            if output_folder.exists() and not output_folder.is_dir():
                raise ValueError(
                    f"Output path exists but is not a directory: {output_folder}"
                )

    def validate(self) -> None:
        """
        Validate intrinsic config values (no filesystem access).

        Catches wrong types, unknown transition ids, and compression levels the
        chosen compression doesn't accept.
        """
        if not isinstance(self.compression, Compression):
            raise ValueError(
                f"compression must be a Compression enum, got {type(self.compression).__name__}. "
                f"Valid values: {[c.value for c in Compression]}"
            )

        if self.compression_level is not None and (
            isinstance(self.compression_level, bool)
            or not isinstance(self.compression_level, int)
        ):
            raise ValueError(
                f"compression_level must be an integer, got {type(self.compression_level).__name__}"
            )

        for field_name in ("verify_slide_xml", "verify_output"):
            val = getattr(self, field_name)
            if not isinstance(val, bool):
                raise ValueError(
                    f"{field_name} must be a boolean, got {type(val).__name__}"
                )

        if not isinstance(self.sequence, list) or not all(
            isinstance(s, str) for s in self.sequence
        ):
            raise ValueError("sequence must be a list of transition ids")
        if not self.sequence:
            raise ValueError(
                f"sequence cannot be empty. Valid transition ids: {', '.join(TRANSITIONS)}"
            )
        unknown = [s for s in self.sequence if s not in TRANSITIONS]
        if unknown:
            raise ValueError(
                f"Unknown transition id(s) in sequence: {', '.join(unknown)}. "
                f"Valid options: {', '.join(TRANSITIONS)}"
            )

        # SerializeOptions knows the valid level range for each compression
        SerializeOptions(compression=self.compression, level=self.compression_level)

    # endregion


# endregion


# region parse_compression
def parse_compression(value: str) -> Compression:
    """Convert a string like "deflated" to a Compression, with a helpful error."""
    try:
        return Compression(value.lower().strip())
    except (ValueError, AttributeError) as e:
        error_msg = (
            f"Invalid compression: '{value}'. "
            f"Valid options: {[c.value for c in Compression]}"
        )
        log.error(error_msg)
        raise ValueError(error_msg) from e


# endregion
