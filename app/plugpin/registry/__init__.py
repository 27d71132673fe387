"""npm registry access."""

from plugpin.registry.client import RegistryClient

__all__ = ["RegistryClient"]
