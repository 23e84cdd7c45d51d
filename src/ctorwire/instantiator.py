from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from ctorwire._internal.binding import ParameterBinder
from ctorwire._internal.constructor_cache import ConstructorCache
from ctorwire._internal.constructors import ConstructorInspector, ReflectiveConstructorInspector
from ctorwire._internal.selection import CachedConstructor, ConstructorResolver
from ctorwire.cache import CrossInvocationCache, InMemoryCache
from ctorwire.exceptions import ObjectInstantiationError
from ctorwire.generators import ClassGenerator, IdentityClassGenerator
from ctorwire.lock_mode import LockMode
from ctorwire.services import ServiceLookup

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Instantiator(Protocol):
    """Create instances of classes from caller-supplied arguments."""

    def new_instance(self, cls: type[T], /, *args: Any) -> T: ...


class DependencyInjectingInstantiator:
    """Create instances by calling the ``@inject`` constructor of a class.

    Caller-supplied values are matched to constructor parameters by type; any
    parameter left without a value is looked up from ``services``. The
    constructor chosen for each generated class is cached in ``cache``, which
    may be shared between instantiators and across invocations.

    Every failure is raised as ``ObjectInstantiationError`` naming the
    requested class, with the underlying exception as ``__cause__``.

    Examples:
        .. code-block:: python

            class Greeter:
                @inject
                def __init__(self, name: str, repository: Repository) -> None: ...


            registry = ServiceRegistry()
            registry.add(Repository())
            instantiator = DependencyInjectingInstantiator(registry)
            greeter = instantiator.new_instance(Greeter, "world")

    """

    def __init__(
        self,
        services: ServiceLookup,
        *,
        class_generator: ClassGenerator | None = None,
        cache: CrossInvocationCache[type[Any], CachedConstructor] | None = None,
        inspector: ConstructorInspector | None = None,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize the instantiator.

        Args:
            services: Lookup used for parameters without a supplied value.
            class_generator: Maps requested classes to the classes actually
                instantiated. Defaults to ``IdentityClassGenerator``.
            cache: Cache of selected constructors keyed by generated class.
                Defaults to a new ``InMemoryCache``.
            inspector: Lists the constructors of a class. Defaults to
                ``ReflectiveConstructorInspector``.
            lock_mode: Locking of the default cache; ignored when ``cache`` is
                given.

        """
        self._class_generator = class_generator or IdentityClassGenerator()
        if cache is None:
            cache = InMemoryCache(lock_mode=lock_mode)
        resolver = ConstructorResolver(inspector or ReflectiveConstructorInspector())
        self._constructors = ConstructorCache(cache, resolver)
        self._binder = ParameterBinder(services)

    def new_instance(self, cls: type[T], /, *args: Any) -> T:
        """Create an instance of ``cls``.

        Args:
            cls: Requested class.
            *args: Values for constructor parameters, matched by type.

        Raises:
            ObjectInstantiationError: When the instance cannot be created.

        """
        try:
            concrete_type = self._class_generator.generate(cls)
            constructor = self._constructors.get(concrete_type, cls).constructor
            arguments = self._binder.bind(cls, constructor, args)
            return constructor.invoke(concrete_type, arguments.args, arguments.kwargs)
        except Exception as error:
            logger.debug("Could not create an instance of %s", cls, exc_info=True)
            raise ObjectInstantiationError(cls) from error


__all__ = ["DependencyInjectingInstantiator", "Instantiator"]
