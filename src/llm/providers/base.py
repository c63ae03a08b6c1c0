from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, system: str, user: str) -> str:
        """
        Must return the model output as TEXT (LLMClient locates and validates the JSON).
        Transport and auth problems are raised as-is; LLMClient collapses them.
        """
        raise NotImplementedError
