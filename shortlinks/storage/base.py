"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Dict


class LinkStoreBase(ABC):
    """Durable home of the code -> target mapping.
    
    Implementations are synchronous and blocking; the registry calls them
    from a worker thread while holding its lock, so they need no locking
    of their own.
    """
    
    def __init__(self, location: str):
        """Initialize store.
        
        Args:
            location: Human-readable location of the backing storage
        """
        self.location = location
    
    @abstractmethod
    def load(self) -> Dict[str, str]:
        """Read the full mapping.
        
        Returns:
            A fresh dictionary the caller may keep
            
        Raises:
            StorageFailure: If the storage cannot be read
        """
        pass
    
    @abstractmethod
    def save(self, links: Dict[str, str]) -> None:
        """Replace the full mapping atomically.
        
        Either the whole new mapping becomes visible or the previous one
        stays in place.
        
        Args:
            links: The complete new mapping
            
        Raises:
            StorageFailure: If the write did not commit
        """
        pass
    
    @abstractmethod
    def health_check(self) -> bool:
        """Check whether the storage is usable for writes.
        
        Returns:
            True if healthy, False otherwise
        """
        pass
