#!/usr/bin/env python
import json
import logging
import sys
import typing
from dataclasses import dataclass
from pathlib import Path

import toml
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Confirm
from traitlets import Bool, Dict, Integer, List, TraitError, Unicode, default
from traitlets.config import Application, Configurable
from traitlets.config.loader import Config

from pybinpack.config import legacy
from pybinpack.generator import check_value_range, generate_items
from pybinpack.types import ConfigurationError, ItemSource, UsageError
from pybinpack.utils import parse_int, parse_ints


USAGE = """Usage: binpack ITEM_COUNT BIN_CAPACITY VALUE_MIN VALUE_MAX [VALUE ...]

  ITEM_COUNT    number of items to generate
  BIN_CAPACITY  size of every bin
  VALUE_MIN     smallest generated item value
  VALUE_MAX     largest generated item value
  VALUE ...     explicit item values; replace ITEM_COUNT and the generator"""


@dataclass(frozen=True)
class RunConfiguration:
    """Everything a single packing run needs; passed around explicitly."""

    item_count: int
    bin_capacity: int
    value_min: int
    value_max: int
    items: typing.Optional[typing.Tuple[int, ...]] = None
    seed: typing.Optional[int] = None
    bin_limit_margin: int = 0

    @property
    def source(self) -> ItemSource:
        return ItemSource.GENERATED if self.items is None else ItemSource.SUPPLIED

    def resolve_items(self) -> typing.Tuple[int, ...]:
        if self.items is not None:
            return self.items
        return generate_items(self.item_count, self.value_min, self.value_max, self.seed)


class Packing(Configurable):
    """ """

    bin_capacity = Integer(default_value=None, allow_none=True, help="Size of every bin.").tag(config=True)
    item_count = Integer(default_value=None, allow_none=True, help="Number of items to generate.").tag(config=True)
    items = List(
        Integer(),
        default_value=None,
        allow_none=True,
        help="Explicit item values; if set, `item_count` is ignored and no items are generated.",
    ).tag(config=True)
    bin_limit_margin = Integer(
        0,
        help="""Number of bins tolerated beyond the number of items before packing is aborted.
0 refuses to open more bins than there are items, 1 restores the historical `count > item_count` bound.""",
    ).tag(config=True)


class Generator(Configurable):
    """ """

    value_min = Integer(default_value=None, allow_none=True, help="Smallest generated item value.").tag(config=True)
    value_max = Integer(default_value=None, allow_none=True, help="Largest generated item value.").tag(config=True)
    seed = Integer(default_value=None, allow_none=True, help="Seed for reproducible item generation (None: random).").tag(
        config=True
    )


class Report(Configurable):
    """ """

    show_numbers = Bool(True, help="List all item values before the bins.").tag(config=True)
    json = Bool(False, help="Print the result as JSON document instead of text.").tag(config=True)
    width = Integer(4, min=0, help="Minimum column width of numbers.").tag(config=True)


def write_profile(app: "PyBinPack", dest_file: typing.Optional[str]) -> int:
    """Write the configuration of `app` as Python profile.

    Output goes to `dest_file`, or to stdout if no file is given. An existing
    file is only replaced after confirmation.

    Returns
    -------
    int
        exit status, non-zero if the user declined to overwrite.
    """
    if not dest_file:
        app.generate_config_file(sys.stdout)
        return 0
    dest = Path(dest_file)
    if dest.exists() and not Confirm.ask(f"Profile [green]{dest.name!r}[/green] already exists. Overwrite it?"):
        print("Aborting...")
        return 1
    with dest.open("w", encoding="utf-8") as out_file:
        app.generate_config_file(out_file)
    return 0


class ProfileCreate(Application):
    description = "\nWrite a profile with the current settings"

    dest_file = Unicode(default_value=None, allow_none=True, help="Profile to write (default: stdout).").tag(config=True)
    aliases = Dict(dict(o="ProfileCreate.dest_file"))  # type:ignore[assignment]

    def start(self):
        status = write_profile(self.parent.parent, self.dest_file)
        if status:
            self.exit(status)


class ProfileConvert(Application):
    description = "\nConvert a legacy .json/.toml file into a Python profile"

    config_file = Unicode(default_value=None, allow_none=True, help="Legacy configuration file (.json/.toml).").tag(config=True)
    dest_file = Unicode(default_value=None, allow_none=True, help="Profile to write (default: stdout).").tag(config=True)
    aliases = Dict(dict(c="ProfileConvert.config_file", o="ProfileConvert.dest_file"))  # type:ignore[assignment]

    def start(self):
        if not self.config_file:
            raise UsageError("profile convert: missing legacy file (-c FILE).")
        pybinpack = self.parent.parent
        pybinpack._read_configuration(self.config_file, emit_warning=False)
        status = write_profile(pybinpack, self.dest_file)
        if status:
            self.exit(status)


class ProfileApp(Application):
    subcommands = Dict(
        {name: (klass, klass.description.strip()) for name, klass in (("create", ProfileCreate), ("convert", ProfileConvert))}
    )

    def start(self):
        if self.subapp is None:
            print(f"Missing profile command, one of: {', '.join(self.subcommands)}")
            self.exit(1)
        self.subapp.start()


class PyBinPack(Application):
    description = "First-fit-decreasing bin packing"
    config_file = Unicode(default_value=None, allow_none=True, help="Configuration file (.py, legacy .json/.toml).").tag(
        config=True
    )

    classes = List([Packing, Generator, Report])

    subcommands = dict(
        profile=(
            ProfileApp,
            """
            Create or convert configuration files
            """.strip(),
        )
    )

    def start(self):
        if self.subapp:
            self.subapp.start()
            self.exit(0)
        has_handlers = logging.getLogger().hasHandlers()
        self._read_configuration(self.config_file)
        if not has_handlers:
            self._setup_logger()
        self.log.debug(f"pybinpack version: {self.version}")

    def _setup_logger(self):
        # Remove any handlers installed by `traitlets`.
        for hdl in list(self.log.handlers):
            self.log.removeHandler(hdl)

        keywords = ["Bin", "bins", "items"]
        rich_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            log_time_format=self.log_datefmt,
            level=self.log_level,
            keywords=keywords,
        )
        self.log.addHandler(rich_handler)

    def initialize(self, argv=None):
        from pybinpack import __version__ as pybinpack_version

        PyBinPack.version = pybinpack_version
        if argv is None:
            argv = sys.argv
        PyBinPack.name = Path(argv[0]).name if argv else "binpack"
        self.parse_command_line(argv[1:])

    def _read_configuration(self, file_name: typing.Optional[str], emit_warning: bool = True) -> None:
        if file_name:
            self.read_configuration_file(file_name, emit_warning)
        self._create_components()

    def _create_components(self) -> None:
        try:
            self.packing = Packing(config=self.config, parent=self)
            self.generator = Generator(config=self.config, parent=self)
            self.report = Report(config=self.config, parent=self)
        except TraitError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def read_configuration_file(self, file_name: str, emit_warning: bool = True):
        self.legacy_config: bool = False

        pth = Path(file_name)
        if not pth.exists():
            raise FileNotFoundError(f"Configuration file {file_name!r} does not exist.")
        suffix = pth.suffix.lower()
        if suffix == ".py":
            self.load_config_file(pth.name, path=[str(pth.parent)])
        else:
            self.legacy_config = True
            if suffix == ".json":
                reader = json
            elif suffix == ".toml":
                reader = toml
            else:
                raise ConfigurationError(f"Unknown file type for config: {suffix!r} (expected .py, .json or .toml).")
            with pth.open("r", encoding="utf-8") as f:
                if emit_warning:
                    self.log.warning(f"Legacy configuration file format ({suffix}), please use Python based configuration.")
                try:
                    cfg = reader.loads(f.read())
                except (json.JSONDecodeError, toml.TomlDecodeError) as e:
                    raise ConfigurationError(f"Malformed configuration file {file_name!r}: {e}") from e
                if cfg:
                    cfg = legacy.convert_config(cfg, self.log)
                    self.update_config(cfg)
                    # Command-line settings take precedence over the file.
                    self.update_config(self.cli_config)
            return cfg

    def run_configuration(self) -> RunConfiguration:
        """Merge positional command-line arguments with the configured traits.

        Raises
        ------
        UsageError
            less than four positional arguments or a required value is missing.
        """
        args = list(self.extra_args)
        if args:
            if len(args) < 4:
                raise UsageError(USAGE)
            try:
                item_count, bin_capacity, value_min, value_max = (
                    parse_int(value, name) for value, name in zip(args[:4], ("ITEM_COUNT", "BIN_CAPACITY", "VALUE_MIN", "VALUE_MAX"))
                )
                items = parse_ints(args[4:], "VALUE") or None
            except ValueError as e:
                raise UsageError(f"{e}\n\n{USAGE}") from None
        else:
            item_count = self.packing.item_count
            bin_capacity = self.packing.bin_capacity
            value_min = self.generator.value_min
            value_max = self.generator.value_max
            items = self.packing.items
            if bin_capacity is None or (items is None and None in (item_count, value_min, value_max)):
                raise UsageError(USAGE)
        if items is not None:
            items = tuple(items)
            item_count = len(items)
        else:
            check_value_range(item_count, value_min, value_max)
        run_config = RunConfiguration(
            item_count=item_count,
            bin_capacity=bin_capacity,
            value_min=value_min,
            value_max=value_max,
            items=items,
            seed=self.generator.seed,
            bin_limit_margin=self.packing.bin_limit_margin,
        )
        self.log.debug(f"Run configuration: {run_config}")
        return run_config

    flags = Dict(  # type:ignore[assignment]
        dict(
            debug=({"PyBinPack": {"log_level": 10}}, "Set loglevel to DEBUG"),
            quiet=({"PyBinPack": {"log_level": 30}, "Report": {"show_numbers": False}}, "Only log warnings, omit item list"),
            json=({"Report": {"json": True}}, "Print the result as JSON document"),
        )
    )

    @default("log_level")
    def _default_value(self):
        return logging.INFO  # traitlets default is logging.WARN

    aliases = Dict(  # type:ignore[assignment]
        dict(
            c="PyBinPack.config_file",  # Application
            log_level="PyBinPack.log_level",
            l="PyBinPack.log_level",
            seed="Generator.seed",
            margin="Packing.bin_limit_margin",
            width="Report.width",
        )
    )

    def _profile_section(self, klass) -> typing.List[str]:
        """Lines describing the configurable traits of `klass`.

        Values set in the current configuration are written as assignments,
        all others as commented-out defaults.
        """
        section = self.config.get(klass.__name__, {})
        lines = ["", f"# {klass.__name__} configuration", f"# {'-' * 76}", ""]
        for name, trait in klass.class_own_traits(config=True).items():
            lines.extend(f"# {line}" for line in trait.help.strip().splitlines())
            default_value = trait.default()
            lines.append(f"#  Type: {trait.info()}, default: {default_value!r}")
            if name in section:
                lines.append(f"c.{klass.__name__}.{name} = {section[name]!r}")
            else:
                lines.append(f"# c.{klass.__name__}.{name} = {default_value!r}")
            lines.append("")
        return lines

    def generate_config_file(self, file_like: typing.TextIO) -> None:
        lines = ["#", "# Configuration file for pybinpack.", "#", "c = get_config()  # noqa", ""]
        for klass in self._classes_with_config_traits():
            lines.extend(self._profile_section(klass))
        file_like.write("\n".join(lines))


application: typing.Optional[PyBinPack] = None


def create_application(argv: typing.Optional[typing.List[str]] = None) -> PyBinPack:
    global application
    if application is not None:
        return application
    application = PyBinPack()
    application.initialize(argv)
    application.start()
    return application


def create_application_from_config(config: typing.Optional[dict] = None, log_level: typing.Optional[int] = None) -> PyBinPack:
    """Build an application without parsing the command line (library use)."""
    app = PyBinPack()
    if config:
        app.update_config(Config(config))
    if log_level is not None:
        app.log_level = log_level
    app._create_components()
    return app


def get_application(argv: typing.Optional[typing.List[str]] = None) -> PyBinPack:
    global application
    if application is None:
        application = create_application(argv)
    return application


def reset_application() -> None:
    global application
    del application
    application = None
    # Sub-commands are traitlets singletons bound to their former parent.
    for klass in (ProfileApp, ProfileCreate, ProfileConvert):
        klass.clear_instance()
