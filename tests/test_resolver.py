"""Tests for resolving and loading symbols."""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autoloader.errors import (
    FileMissingAfterMatchError,
    InvalidSymbolNameError,
    SymbolAlreadyDefinedError,
    SymbolNotDefinedAfterIncludeError,
)
from autoloader.matcher import ACCUMULATE
from autoloader.module_host import ModuleHost
from autoloader.resolver import Resolver


def write_symbol(
    root: Path, relative: str, namespace: str, class_name: str, ext: str = ".py"
) -> Path:
    """Write a Python file defining one class in a namespace."""
    path = root / (relative + ext)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"__namespace__ = {namespace!r}\n\n\nclass {class_name}:\n    source = {str(root)!r}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def host() -> ModuleHost:
    """Fixture providing an empty module host."""
    return ModuleHost()


def test_base_path_scenario(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that Foo\\Bar loads from <base>/Foo/Bar.py."""
    expected = write_symbol(tmp_path, "Foo/Bar", "Foo", "Bar")
    resolver = Resolver(host).add_base_path(str(tmp_path))

    assert resolver.load_symbol("Foo\\Bar") is True
    assert host.is_defined("Foo\\Bar")
    assert host.included == [str(expected)]


def test_prefix_path_scenario(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that a prefix is replaced and not repeated in the path."""
    src = tmp_path / "src"
    expected = write_symbol(src, "Sub/Class", "Vendor\\Lib\\Sub", "Class")
    resolver = Resolver(host).add_prefix_path(str(src), "Vendor\\Lib")

    result = resolver.resolve("Vendor\\Lib\\Sub\\Class")

    assert result is not None
    assert result.path == str(expected)
    assert result.strategy == "prefix"
    assert result.namespace == "Vendor\\Lib\\"


def test_prefix_path_does_not_fold_underscores(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that prefix resolution keeps underscores in file names."""
    expected = write_symbol(tmp_path, "Class_Name", "Vendor", "Class_Name")
    resolver = Resolver(host).add_prefix_path(str(tmp_path), "Vendor")
    assert resolver.find_file("Vendor\\Class_Name") == str(expected)


def test_base_path_folds_underscores(tmp_path: Path, host: ModuleHost) -> None:
    """Verify PSR-0 style names without namespaces."""
    write_symbol(tmp_path, "Library/Dummy", "", "Library_Dummy")
    resolver = Resolver(host).add_base_path(str(tmp_path))
    assert resolver.load_symbol("Library_Dummy") is True


def test_missing_symbol_returns_false(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that an unknown symbol is simply not loaded."""
    resolver = Resolver(host).add_base_path(str(tmp_path))
    assert resolver.load_symbol("ThisClassDoesNotExist") is False
    assert resolver.resolve("ThisClassDoesNotExist") is None
    assert host.included == []


def test_empty_directory_finds_nothing(host: ModuleHost) -> None:
    """Verify that an empty base path does not break resolution."""
    resolver = Resolver(host).add_base_path("")
    assert resolver.load_symbol("ThisClassDoesNotExist") is False


def test_find_file_does_not_include(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that find_file only locates the file."""
    expected = write_symbol(tmp_path, "Foo/Bar", "Foo", "Bar")
    resolver = Resolver(host).add_base_path(str(tmp_path))
    assert resolver.find_file("Foo\\Bar") == str(expected)
    assert resolver.find_file("") is None
    assert resolver.find_file(None) is None
    assert not host.is_defined("Foo\\Bar")


def test_already_defined_verbose_raises(host: ModuleHost) -> None:
    """Verify that loading a defined symbol is an error in verbose mode."""
    host.define("Foo\\Bar", object)
    resolver = Resolver(host, verbose=True)
    with pytest.raises(SymbolAlreadyDefinedError):
        resolver.load_symbol("Foo\\Bar")


def test_already_defined_silent_is_noop(host: ModuleHost) -> None:
    """Verify that silent mode returns nothing and never touches the file system."""
    host.define("Foo\\Bar", object)
    exists = MagicMock(return_value=True)
    resolver = Resolver(host, verbose=False, exists=exists)
    resolver.add_base_path("lib")

    assert resolver.load_symbol("Foo\\Bar") is None
    exists.assert_not_called()


@pytest.mark.parametrize("name", ["", None, 42])
def test_invalid_name(name: object, host: ModuleHost) -> None:
    """Verify invalid names raise in verbose mode and are ignored when silent."""
    with pytest.raises(InvalidSymbolNameError):
        Resolver(host).load_symbol(name)  # type: ignore[arg-type]
    assert Resolver(host, verbose=False).load_symbol(name) is None  # type: ignore[arg-type]


def test_file_without_symbol_raises(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that an included file must define the symbol."""
    write_symbol(tmp_path, "NoClassHere", "", "SomethingElse")
    resolver = Resolver(host).add_base_path(str(tmp_path))
    with pytest.raises(SymbolNotDefinedAfterIncludeError) as excinfo:
        resolver.load_symbol("NoClassHere")
    assert excinfo.value.symbol == "NoClassHere"
    assert excinfo.value.path.endswith("NoClassHere.py")


def test_file_without_symbol_toggle_off(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that the missing-symbol error can be turned into a false return."""
    write_symbol(tmp_path, "NoClassHere", "", "SomethingElse")
    resolver = Resolver(host, raise_on_missing_symbol=False).add_base_path(str(tmp_path))
    assert resolver.load_symbol("NoClassHere") is False


def test_file_without_symbol_silent(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that silent mode swallows the missing-symbol error."""
    write_symbol(tmp_path, "NoClassHere", "", "SomethingElse")
    resolver = Resolver(host, verbose=False).add_base_path(str(tmp_path))
    assert resolver.load_symbol("NoClassHere") is None


def test_vendor_missing_symbol_has_own_toggle(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that vendor files use their own missing-symbol toggle."""
    write_symbol(tmp_path, "Thing", "Vendor", "Other")
    resolver = Resolver(
        host, raise_on_missing_symbol=True, raise_on_vendor_missing_symbol=False
    ).add_vendor_path("Vendor", str(tmp_path))
    assert resolver.load_symbol("Vendor\\Thing") is False


def test_vendor_most_specific_first(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that Vendor\\Sub is searched before Vendor."""
    write_symbol(tmp_path / "vendor", "Sub/Thing", "Vendor\\Sub", "Thing")
    expected = write_symbol(tmp_path / "sub", "Thing", "Vendor\\Sub", "Thing")
    resolver = Resolver(host)
    resolver.add_vendor_path("Vendor", str(tmp_path / "vendor"))
    resolver.add_vendor_path("Vendor\\Sub", str(tmp_path / "sub"))

    result = resolver.resolve("Vendor\\Sub\\Thing")

    assert result is not None
    assert result.path == str(expected)
    assert result.strategy == "vendor"


def test_vendor_missing_file_falls_through(tmp_path: Path, host: ModuleHost) -> None:
    """Verify silent fallthrough to base paths when a vendor has no file."""
    (tmp_path / "vendor").mkdir()
    expected = write_symbol(tmp_path / "base", "Vendor/Thing", "Vendor", "Thing")
    resolver = Resolver(host)
    resolver.add_vendor_path("Vendor", str(tmp_path / "vendor"))
    resolver.add_base_path(str(tmp_path / "base"))

    result = resolver.resolve("Vendor\\Thing")

    assert result is not None
    assert result.path == str(expected)
    assert result.strategy == "base"


def test_vendor_missing_file_raises_when_enabled(tmp_path: Path, host: ModuleHost) -> None:
    """Verify the vendor file-missing error toggle."""
    write_symbol(tmp_path / "base", "Vendor/Thing", "Vendor", "Thing")
    resolver = Resolver(host, raise_on_vendor_missing_file=True)
    resolver.add_vendor_path("Vendor", str(tmp_path / "vendor"))
    resolver.add_base_path(str(tmp_path / "base"))

    with pytest.raises(FileMissingAfterMatchError):
        resolver.load_symbol("Vendor\\Thing")
    assert resolver.load_symbol("Other\\Thing") is False


def test_prefix_paths_before_base_paths(tmp_path: Path, host: ModuleHost) -> None:
    """Verify the ordering contract across tables."""
    write_symbol(tmp_path / "base", "Foo/Bar", "Foo", "Bar")
    expected = write_symbol(tmp_path / "prefix", "Bar", "Foo", "Bar")
    resolver = Resolver(host)
    resolver.add_base_path(str(tmp_path / "base"))
    resolver.add_prefix_path(str(tmp_path / "prefix"), "Foo")

    result = resolver.resolve("Foo\\Bar")

    assert result is not None
    assert result.path == str(expected)


def test_include_path(tmp_path: Path, host: ModuleHost, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify the environment search path as the last fallback."""
    write_symbol(tmp_path / "include", "pathSuccess", "", "pathSuccess")
    monkeypatch.setenv("AUTOLOAD_PATH", "")
    resolver = Resolver(host, use_include_path=False)
    assert resolver.find_file("pathSuccess") is None

    resolver.use_include_path = True
    assert resolver.find_file("pathSuccess") is None

    monkeypatch.setenv(
        "AUTOLOAD_PATH", os.pathsep.join([str(tmp_path / "missing"), str(tmp_path / "include")])
    )
    result = resolver.resolve("pathSuccess")
    assert result is not None
    assert result.strategy == "include_path"


def test_include_path_after_base_paths(
    tmp_path: Path, host: ModuleHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Verify that base paths win over the environment search path."""
    write_symbol(tmp_path / "include", "Foo", "", "Foo")
    expected = write_symbol(tmp_path / "base", "Foo", "", "Foo")
    monkeypatch.setenv("MY_PATH", str(tmp_path / "include"))
    resolver = Resolver(host, use_include_path=True, include_path_env="MY_PATH")
    resolver.add_base_path(str(tmp_path / "base"))
    assert resolver.find_file("Foo") == str(expected)


def test_different_extensions(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that only configured extensions are tried."""
    write_symbol(tmp_path, "DifferentExt", "", "DifferentExt", ext=".inc")
    resolver = Resolver(host).add_base_path(str(tmp_path))
    assert resolver.find_file("DifferentExt") is None
    resolver.extensions = [".inc"]
    assert resolver.load_symbol("DifferentExt") is True


def test_accumulate_policy(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that the resolver applies the configured ancestor policy."""
    write_symbol(tmp_path / "general", "Foo/Bar", "Foo", "Bar")
    expected = write_symbol(tmp_path / "scoped", "Foo/Bar", "Foo", "Bar")
    resolver = Resolver(host, ancestor_policy=ACCUMULATE)
    resolver.add_base_path(str(tmp_path / "general"))
    resolver.add_base_path(str(tmp_path / "scoped"), "Foo")
    assert resolver.find_file("Foo\\Bar") == str(expected)


def test_unknown_ancestor_policy(host: ModuleHost) -> None:
    """Verify that the ancestor policy is checked up front."""
    with pytest.raises(ValueError, match="policy"):
        Resolver(host, ancestor_policy="nearest")


def test_resolve_is_idempotent_for_missing_symbol(tmp_path: Path, host: ModuleHost) -> None:
    """Verify that repeating a failed resolution gives the same outcome."""
    write_symbol(tmp_path, "Other", "", "Other")
    resolver = Resolver(host).add_base_path(str(tmp_path))
    assert resolver.load_symbol("Missing") is False
    assert resolver.load_symbol("Missing") is False


def test_host_mock_receives_include() -> None:
    """Verify the resolver only talks to the host through its interface."""
    host = MagicMock()
    host.is_defined.side_effect = [False, True]
    resolver = Resolver(host, exists=lambda path: path.endswith("Foo.py"))
    resolver.add_base_path("lib")

    assert resolver.load_symbol("Foo") is True
    host.include.assert_called_once_with(os.path.join("lib", "Foo.py"))
