import math
import re
from typing import List, Optional

from bs4 import BeautifulSoup

from logger import setup_logger
from models import RawGame, RawTier
from normalizer import parse_odds, parse_remaining_of_total
from providers.base import LotteryProvider

logger = setup_logger(__name__)

_GAME_NUMBER = re.compile(r'\((\d+)\)')
_PAGE_PRICE = (
    re.compile(r'\$(\d+)\s*(?:scratchers|scratcher|ticket)', re.IGNORECASE),
    re.compile(r'Price[:\s]*\$(\d+)', re.IGNORECASE),
)
_URL_PRICE = re.compile(r'/scratchers/\$(\d+)/', re.IGNORECASE)
_CLAIMED_ODDS = re.compile(r'(?:Overall\s+)?[Oo]dds[:\s]*1\s+in\s+([\d,.]+)')
# "$1,000 | 1 in 62,257 | 137 of 147" when the prize table is flattened to text
_TEXT_TIER = re.compile(
    r'(\$[\d,]+|Ticket)\s*[|\t]+\s*(?:1\s+in\s+)?([\d,]+(?:\.\d+)?)\s*[|\t]+\s*([\d,]+)\s+of\s+([\d,]+)',
    re.IGNORECASE,
)


class CaliforniaProvider(LotteryProvider):
    """California Lottery scratcher pages"""

    @property
    def state_code(self) -> str:
        return "CA"

    @property
    def base_url(self) -> str:
        return "https://www.calottery.com"

    def price_from_url(self, url: Optional[str]) -> Optional[int]:
        """/scratchers/$20/... -> 20"""
        if not url:
            return None
        m = _URL_PRICE.search(url)
        return int(m.group(1)) if m else None

    def extract_game(self, html_content: str, url: Optional[str] = None) -> RawGame:
        """Extract name, number, price, claimed odds and prize tiers from a game page"""
        soup = BeautifulSoup(html_content, 'html.parser')

        name, number = "", ""
        title = soup.select_one('h1') or soup.title
        if title:
            name = title.get_text(strip=True)
            m = _GAME_NUMBER.search(name)
            if m:
                number = m.group(1)
                name = _GAME_NUMBER.sub('', name, count=1).strip()

        ticket_price = None
        for pattern in _PAGE_PRICE:
            m = pattern.search(html_content)
            if m:
                ticket_price = int(m.group(1))
                break
        if not ticket_price:
            ticket_price = self.price_from_url(url)

        odds_matches = [m.group(0) for m in _CLAIMED_ODDS.finditer(html_content)]
        claimed_odds = odds_matches[0] if odds_matches else ""
        claimed_cash_odds = odds_matches[1] if len(odds_matches) > 1 else ""

        tiers = self._tiers_from_tables(soup) or self._tiers_from_text(soup, html_content)
        if not tiers:
            logger.warning("No prize tiers found on page", extra={
                "event": "no_tiers",
                "game_name": name,
                "url": url,
            })

        return RawGame(
            name=name,
            number=number,
            ticket_price=ticket_price,
            claimed_odds=claimed_odds,
            claimed_cash_odds=claimed_cash_odds,
            tiers=tiers,
        )

    def _tiers_from_tables(self, soup: BeautifulSoup) -> List[RawTier]:
        # Prize | Odds 1 in | Prizes Remaining (X of Y)
        tiers = []
        for table in soup.find_all('table'):
            for row in table.find_all('tr'):
                cols = row.find_all('td')
                if len(cols) < 3:
                    continue
                prize_text = cols[0].get_text(strip=True)
                odds_text = cols[1].get_text(strip=True)
                remaining_text = cols[2].get_text(strip=True)

                if parse_remaining_of_total(remaining_text) is None or math.isnan(parse_odds(odds_text)):
                    continue
                tiers.append(RawTier(
                    prize=prize_text,
                    value=prize_text,
                    odds=odds_text,
                    remaining_of_total=remaining_text,
                ))
        return tiers

    def _tiers_from_text(self, soup: BeautifulSoup, html_content: str) -> List[RawTier]:
        text = soup.body.get_text() if soup.body else html_content
        return [
            RawTier(
                prize=m.group(1),
                value=m.group(1),
                odds=m.group(2),
                remaining=m.group(3),
                total=m.group(4),
            )
            for m in _TEXT_TIER.finditer(text)
        ]


# Auto-register
from providers import register_provider  # noqa: E402
register_provider("CA", CaliforniaProvider())
