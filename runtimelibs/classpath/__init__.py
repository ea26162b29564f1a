"""Where loaded jars end up: the host classpath or an isolated unit."""

from .injector import ClasspathInjector, ClasspathList
from .isolation import IsolatedClasspath, IsolationRegistry

__all__ = [
    "ClasspathInjector",
    "ClasspathList",
    "IsolatedClasspath",
    "IsolationRegistry",
]
