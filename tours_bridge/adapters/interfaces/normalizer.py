from abc import ABC, abstractmethod
from typing import Any, Generic, List, Tuple, TypeVar

# Type variables for generics
T = TypeVar('T')  # Generic type for raw data
R = TypeVar('R')  # Generic type for normalized data


class DataNormalizer(Generic[T, R], ABC):
    """
    Abstract base interface for data normalizers.

    This interface defines the standard contract for components that normalize
    data from external APIs into standardized internal formats for the application.

    Type Parameters:
        T: The type of raw data from the external API
        R: The type of normalized data after processing
    """

    @abstractmethod
    def normalize(self, raw_data: T) -> R:
        """
        Normalizes one record from external API format to standardized format.

        Implementations must be total: degraded input yields a degraded
        record, never an exception.

        Args:
            raw_data: Raw record from external API

        Returns:
            R: Normalized record
        """

    @abstractmethod
    def extract_listing(self, payload: Any) -> Tuple[List[T], int]:
        """
        Extracts the record list and the total count from a list response.

        Args:
            payload: Raw list response from external API

        Returns:
            Tuple[List[T], int]: The raw records and the reported (or derived) total
        """
