"""
Operation registry - Binds concrete operations to their abstract contracts.

A contract is the parameterized Operation type a class implements, e.g.
``Operation[RenameProject, Project]``. Each contract has at most one
implementation.

Lifecycle:
    OperationRegistry (mutable, startup only)
        register() / add_operations()
    -> build()
    OperationProvider (read-only, shared by every request)
        get() / require() create a fresh instance per call

Discovery is explicit: add_operations() scans the classes, modules or
packages it is given. Called without sources it falls back to every
Operation subclass defined at module level in a loaded module. When a class
and its subclass both implement a contract, discovery binds the subclass.
Discovery happens once at startup; after build() the registry is sealed and
the provider's table never changes, so concurrent resolution needs no locking.
"""

import importlib
import inspect
import logging
import pkgutil
import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType, ModuleType
from typing import Any, TypeVar, get_args, get_origin

from .exceptions import (
    DuplicateOperationBinding,
    InvalidOperation,
    OperationNotRegistered,
    RegistrySealed,
)
from .ports import Operation

logger = logging.getLogger(__name__)

OperationFactory = Callable[[], Operation[Any, Any]]
OperationSource = type | ModuleType | str


def _is_open(arg: Any) -> bool:
    """True when a type argument still contains unbound type variables."""
    if isinstance(arg, TypeVar):
        return True
    if isinstance(arg, type):
        return False
    return bool(getattr(arg, "__parameters__", ()))


def _operation_args(cls: type, substitutions: dict[Any, Any]) -> tuple[Any, ...] | None:
    """Walk the generic bases of cls until Operation[...] is found."""
    for base in cls.__dict__.get("__orig_bases__", cls.__bases__):
        origin = get_origin(base) or base
        args = tuple(substitutions.get(arg, arg) for arg in get_args(base))
        if origin is Operation:
            return args
        if isinstance(origin, type) and issubclass(origin, Operation):
            parameters = getattr(origin, "__parameters__", ())
            found = _operation_args(origin, dict(zip(parameters, args)))
            if found is not None:
                return found
    return None


def contract_of(cls: Any) -> Any | None:
    """
    Return the Operation contract implemented by a concrete class.

    Type variables are resolved through generic intermediate classes, so
    ``class Create(CrudOperation[CreateUser, User])`` resolves to
    ``Operation[CreateUser, User]``.

    Returns:
        The parameterized Operation type, or None when cls is not a concrete
        implementation (abstract, unparameterized or still generic)
    """
    if not isinstance(cls, type) or not issubclass(cls, Operation):
        return None
    if inspect.isabstract(cls):
        return None
    args = _operation_args(cls, {})
    if args is None or len(args) != 2 or any(_is_open(arg) for arg in args):
        return None
    return Operation[args]


def type_name(tp: Any) -> str:
    """Short display name of a contract type argument."""
    if tp is type(None):
        return "None"
    if get_origin(tp) is not None:
        return repr(tp)
    return getattr(tp, "__name__", None) or repr(tp)


def describe_contract(contract: Any) -> str:
    """Human-readable contract name, e.g. ``Operation[RenameProject, Project]``."""
    args = get_args(contract)
    return f"Operation[{', '.join(type_name(arg) for arg in args)}]"


@dataclass(frozen=True)
class OperationBinding:
    """One row of the registry: contract -> implementation."""

    contract: Any
    implementation: type
    factory: OperationFactory

    @property
    def command_type(self) -> Any:
        return get_args(self.contract)[0]

    @property
    def result_type(self) -> Any:
        return get_args(self.contract)[1]

    def create(self) -> Operation[Any, Any]:
        """Build a new, independent operation instance."""
        return self.factory()


def _iter_modules(module: ModuleType) -> Iterator[ModuleType]:
    yield module
    if hasattr(module, "__path__"):
        for info in pkgutil.walk_packages(module.__path__, prefix=f"{module.__name__}."):
            yield importlib.import_module(info.name)


def _module_operations(module: ModuleType) -> Iterator[type]:
    """Concrete operations defined (not merely imported) in a module."""
    for _, member in inspect.getmembers(module, inspect.isclass):
        if member.__module__ == module.__name__ and contract_of(member) is not None:
            yield member


def _is_importable(cls: type) -> bool:
    """True when cls can be reached by name from its module."""
    if "<locals>" in cls.__qualname__:
        return False
    target: Any = sys.modules.get(cls.__module__)
    for part in cls.__qualname__.split("."):
        target = getattr(target, part, None)
    return target is cls


def _loaded_operations() -> list[type]:
    """Concrete operations defined at module level in loaded modules."""
    seen: set[type] = set()
    pending = list(Operation.__subclasses__())
    while pending:
        cls = pending.pop()
        if cls in seen:
            continue
        seen.add(cls)
        pending.extend(cls.__subclasses__())
    concrete = [cls for cls in seen if contract_of(cls) is not None and _is_importable(cls)]
    return sorted(concrete, key=lambda cls: (cls.__module__, cls.__qualname__))


def _most_derived(candidates: list[type]) -> type | None:
    """The candidate that subclasses every other one, if there is one."""
    for candidate in candidates:
        if all(issubclass(candidate, other) for other in candidates):
            return candidate
    return None


class OperationRegistry:
    """
    Startup-time collection of operation bindings.

    Every binding is transient: the provider calls the binding's factory on
    each retrieval. The factory defaults to the implementation class itself;
    pass one explicitly to supply constructor dependencies.
    """

    def __init__(self) -> None:
        self._bindings: dict[Any, OperationBinding] = {}
        self._sealed = False

    @property
    def bindings(self) -> tuple[OperationBinding, ...]:
        """Bindings in registration order."""
        return tuple(self._bindings.values())

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._bindings)

    def register(
        self, implementation: type, factory: OperationFactory | None = None
    ) -> OperationBinding:
        """
        Bind an implementation under the contract it implements.

        Registering the same implementation again is a no-op unless a new
        factory is given, in which case the factory is replaced.

        Raises:
            RegistrySealed: If build() was already called
            InvalidOperation: If implementation is not a concrete Operation
            DuplicateOperationBinding: If another implementation already
                holds the contract
        """
        if self._sealed:
            raise RegistrySealed("Registry is sealed; register operations before build()")

        contract = contract_of(implementation)
        if contract is None:
            raise InvalidOperation(
                f"{implementation!r} is not a concrete implementation of a parameterized Operation"
            )

        existing = self._bindings.get(contract)
        if existing is not None:
            if existing.implementation is not implementation:
                raise DuplicateOperationBinding(
                    f"{describe_contract(contract)} is already bound to "
                    f"{existing.implementation.__qualname__}; "
                    f"cannot bind {implementation.__qualname__}"
                )
            if factory is None:
                return existing

        binding = OperationBinding(contract, implementation, factory or implementation)
        self._bindings[contract] = binding
        logger.debug(
            "Bound %s to %s.%s",
            describe_contract(contract),
            implementation.__module__,
            implementation.__qualname__,
        )
        return binding

    def add_operations(self, *sources: OperationSource) -> "OperationRegistry":
        """
        Discover and register concrete operations.

        A subclass of a concrete operation inherits its parent's contract.
        When discovery finds both, or finds a subclass of an already bound
        implementation, the most-derived class is bound.

        Args:
            *sources: Operation classes, modules, packages (scanned
                recursively) or dotted module names. With no sources, every
                Operation subclass defined at module level in a loaded module
                is discovered; classes defined inside functions must be
                passed explicitly.

        Returns:
            This registry, for chaining

        Raises:
            DuplicateOperationBinding: If unrelated implementations share a
                contract
        """
        if self._sealed:
            raise RegistrySealed("Registry is sealed; register operations before build()")

        if not sources:
            discovered = _loaded_operations()
        else:
            discovered = list(self._iter_sources(sources))

        by_contract: dict[Any, list[type]] = {}
        for implementation in discovered:
            contract = contract_of(implementation)
            if contract is None:
                self.register(implementation)  # raises InvalidOperation
            candidates = by_contract.setdefault(contract, [])
            if implementation not in candidates:
                candidates.append(implementation)

        for contract, candidates in by_contract.items():
            implementation = _most_derived(candidates)
            if implementation is None:
                names = ", ".join(candidate.__qualname__ for candidate in candidates)
                raise DuplicateOperationBinding(
                    f"{describe_contract(contract)} is implemented by unrelated classes: {names}"
                )
            if len(candidates) > 1:
                logger.debug(
                    "Chose %s for %s over its base class(es)",
                    implementation.__qualname__,
                    describe_contract(contract),
                )
            self._discover(contract, implementation)

        logger.info(
            "Discovered %d operation(s); %d binding(s) registered",
            len(discovered),
            len(self._bindings),
        )
        return self

    def _discover(self, contract: Any, implementation: type) -> None:
        existing = self._bindings.get(contract)
        if existing is not None and existing.implementation is not implementation:
            if issubclass(existing.implementation, implementation):
                return
            if issubclass(implementation, existing.implementation):
                logger.debug(
                    "Replacing %s with subclass %s for %s",
                    existing.implementation.__qualname__,
                    implementation.__qualname__,
                    describe_contract(contract),
                )
                del self._bindings[contract]
        self.register(implementation)

    def _iter_sources(self, sources: Iterable[OperationSource]) -> Iterator[type]:
        for source in sources:
            if isinstance(source, type):
                yield source
                continue
            if isinstance(source, str):
                source = importlib.import_module(source)
            if not isinstance(source, ModuleType):
                raise TypeError(f"Cannot discover operations in {source!r}")
            for module in _iter_modules(source):
                yield from _module_operations(module)

    def build(self) -> "OperationProvider":
        """Seal the registry and return a read-only provider."""
        self._sealed = True
        return OperationProvider(self._bindings.values())


class OperationProvider:
    """Read-only lookup from contract to a freshly built operation."""

    def __init__(self, bindings: Iterable[OperationBinding]) -> None:
        self._bindings = MappingProxyType({binding.contract: binding for binding in bindings})

    @property
    def bindings(self) -> tuple[OperationBinding, ...]:
        return tuple(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, contract: Any) -> bool:
        return contract in self._bindings

    def get(self, contract: Any) -> Operation[Any, Any] | None:
        """Return a new instance bound to contract, or None if unbound."""
        binding = self._bindings.get(contract)
        if binding is None:
            return None
        return binding.create()

    def require(self, contract: Any) -> Operation[Any, Any]:
        """
        Return a new instance bound to contract.

        Raises:
            OperationNotRegistered: If nothing is bound to contract
        """
        operation = self.get(contract)
        if operation is None:
            raise OperationNotRegistered(f"No operation bound to {describe_contract(contract)}")
        return operation
