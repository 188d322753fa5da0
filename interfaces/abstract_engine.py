from abc import ABC, abstractmethod

from models.config import Config
from models.dataset import Dataset


class AbstractEngine(ABC):
    """ The anonymization engine, which searches the generalization lattice for a solution satisfying the criteria """

    @abstractmethod
    def anonymize(self, data: Dataset, config: Config) -> Dataset:
        pass
