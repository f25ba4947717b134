from typing import Type

from cryptsearch.models.schemas import CipherFamily
from cryptsearch.services.transforms.base import Transform


class TransformRegistry:
    """
    Registry for inverse transforms.

    Provides lookup of the transform that applies to a cipher family.
    """

    _transforms: dict[CipherFamily, Type[Transform]] = {}
    _instances: dict[CipherFamily, Transform] = {}

    @classmethod
    def register(cls, transform_class: Type[Transform]) -> Type[Transform]:
        """
        Register a transform class.

        Can be used as a decorator:
            @TransformRegistry.register
            class ColumnarTransform(Transform):
                ...

        Args:
            transform_class: The transform class to register

        Returns:
            The transform class (for decorator usage)
        """
        cls._transforms[transform_class.cipher_family] = transform_class
        return transform_class

    def get_transform(self, family: CipherFamily) -> Transform | None:
        """
        Get a transform instance for the specified cipher family.

        Args:
            family: The cipher family

        Returns:
            Transform instance or None if not found
        """
        if family not in self._transforms:
            return None

        # Lazy instantiation with caching
        if family not in self._instances:
            self._instances[family] = self._transforms[family]()

        return self._instances[family]

    @classmethod
    def list_registered(cls) -> list[CipherFamily]:
        """List all registered cipher families."""
        return list(cls._transforms.keys())


def _load_transforms() -> None:
    """Load all transform modules to trigger registration."""
    from cryptsearch.services.transforms import polyalphabetic, transposition  # noqa: F401


_load_transforms()
