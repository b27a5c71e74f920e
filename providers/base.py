from abc import ABC, abstractmethod
from typing import Optional

from models import RawGame


class LotteryProvider(ABC):
    """
    Abstract base for state lottery providers.
    Each state turns its own game-page markup into a RawGame.
    """

    @property
    @abstractmethod
    def state_code(self) -> str:
        """Two-letter state code (e.g., 'CA', 'NC')"""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Host prefix of the lottery's game pages"""
        pass

    def handles(self, url: str) -> bool:
        """True if a game page URL belongs to this lottery"""
        return url.lower().startswith(self.base_url.lower())

    @abstractmethod
    def extract_game(self, html_content: str, url: Optional[str] = None) -> RawGame:
        """
        Extract one game from a game page.

        Args:
            html_content: Raw HTML of the game page
            url: Page URL, when known; some lotteries only encode the price there

        Returns:
            RawGame with whatever tiers could be read. Missing data is left
            empty rather than raised.
        """
        pass
