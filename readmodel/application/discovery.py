"""Discovery of query shapes, handlers and collections in feature packages.

A feature package lays its components out by convention:

- ``<package>/queries.py`` or ``<package>/queries/``: SearchQuery subclasses
- ``<package>/handlers.py`` or ``<package>/handlers/``: QueryHandler subclasses
- ``<package>/collections.py`` or ``<package>/collections/``: module-level
  CollectionDescriptor instances

Singular module names (``query``, ``handler``, ``collection``) work too.
"""

import importlib
import inspect
import pkgutil
from collections.abc import Iterable
from types import ModuleType
from typing import TypeVar

T = TypeVar("T")

_PLURALS = {"query": "queries"}


def _should_skip_module(module_name: str) -> bool:
    """Skip test modules and private modules other than __init__."""
    return module_name.startswith("test_") or (
        module_name.startswith("_") and module_name != "__init__"
    )


def _get_module_variants(name: str) -> list[str]:
    """Get singular and plural variants of a module name.

    Examples:
        >>> _get_module_variants("handler")
        ['handler', 'handlers']
        >>> _get_module_variants("query")
        ['query', 'queries']
    """
    return [name, _PLURALS.get(name, name + "s")]


def _try_import_module(module_name: str) -> ModuleType | None:
    """Import a module, returning None if it does not exist."""
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        # Only a missing convention module is tolerated; a broken import
        # inside an existing module must surface.
        if e.name is not None and module_name.startswith(e.name):
            return None
        raise


class ModuleScanner:
    """Finds the convention modules of a feature package.

    Automatically skips test modules (``test_*.py``) and private modules
    (``_*.py`` other than ``__init__.py``).

    Raises:
        ImportError: If the package cannot be imported.
    """

    def __init__(self, package_name: str):
        self.package_name = package_name
        self.root_module = importlib.import_module(package_name)

    def find_modules(self, kind: str) -> Iterable[ModuleType]:
        """Yield the modules for a kind of component, recursing into packages.

        Examples:
            >>> scanner = ModuleScanner("readmodel.features.supercoach")
            >>> [m.__name__ for m in scanner.find_modules("handler")]
            ['readmodel.features.supercoach.handlers']
        """
        for variant in _get_module_variants(kind):
            module = _try_import_module(f"{self.package_name}.{variant}")
            if module is None:
                continue

            yield module

            if hasattr(module, "__path__"):
                yield from self._scan_package_recursive(module)

    def _scan_package_recursive(self, package: ModuleType) -> Iterable[ModuleType]:
        for _importer, modname, is_pkg in pkgutil.iter_modules(
            package.__path__, prefix=f"{package.__name__}."
        ):
            if _should_skip_module(modname.rsplit(".", 1)[-1]):
                continue

            try:
                module = importlib.import_module(modname)
            except ImportError as e:
                raise ImportError(
                    f"Failed to import module {modname} while scanning {package.__name__}. Error: {e}"
                ) from e

            yield module
            if is_pkg:
                yield from self._scan_package_recursive(module)


class ClassScanner:
    """Extract components from modules by type."""

    @staticmethod
    def find_subclasses(module: ModuleType, base_class: type[T]) -> Iterable[type[T]]:
        """Find concrete, public subclasses of base_class defined in module.

        Classes imported from elsewhere are ignored so that a shape is
        discovered once, in the module that defines it.
        """
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, base_class)
                and obj is not base_class
                and not name.startswith("_")
                and not inspect.isabstract(obj)
                and obj.__module__ == module.__name__
            ):
                yield obj

    @staticmethod
    def find_instances(module: ModuleType, instance_type: type[T]) -> Iterable[T]:
        """Find public module-level instances of instance_type."""
        for name, obj in vars(module).items():
            if not name.startswith("_") and isinstance(obj, instance_type):
                yield obj
