"""
YFinance Price Provider
Async-safe Yahoo Finance lookup used as a fallback price source
"""

import asyncio
import logging
import os
from decimal import Decimal
from typing import Dict, Optional

import yfinance as yf

logger = logging.getLogger(__name__)


class YFinanceProvider:
    """
    Yahoo Finance price provider
    Async-safe via thread offloading
    """

    def __init__(self, symbol_suffix: str = ".SA"):
        self.symbol_suffix = symbol_suffix
        self.symbol_mapping: Dict[str, str] = {}
        self._apply_symbol_overrides()

    def _apply_symbol_overrides(self) -> None:
        """
        Apply Yahoo symbol mapping overrides from env.

        Format: YF_SYMBOL_OVERRIDES="HGLG11=HGLG11.SA,FOO=FOO.TO"
        """
        raw = os.getenv("YF_SYMBOL_OVERRIDES", "").strip()
        if not raw:
            return
        for pair in raw.split(","):
            pair = pair.strip()
            if not pair or "=" not in pair:
                continue
            key, value = pair.split("=", 1)
            key = key.strip().upper()
            value = value.strip()
            if key and value:
                self.symbol_mapping[key] = value

    def to_yahoo_symbol(self, identifier: str) -> str:
        symbol = identifier.strip().upper()
        if symbol in self.symbol_mapping:
            return self.symbol_mapping[symbol]
        # Already exchange-qualified or an index
        if "." in symbol or symbol.startswith("^"):
            return symbol
        return f"{symbol}{self.symbol_suffix}"

    async def _history(self, ticker: yf.Ticker, **kwargs):
        """
        Async-safe wrapper around yfinance history()
        """
        return await asyncio.to_thread(ticker.history, **kwargs)

    async def get_current_price(self, identifier: str) -> Optional[Decimal]:
        """
        Latest available close (last 5 sessions)
        """
        if not identifier or not identifier.strip():
            return None

        yf_symbol = self.to_yahoo_symbol(identifier)
        try:
            ticker = yf.Ticker(yf_symbol)
            hist = await self._history(ticker, period="5d", interval="1d", auto_adjust=False)
        except Exception as e:
            # yfinance surfaces network and parsing problems as assorted exception types
            logger.error(f"Error fetching current price for {yf_symbol}: {e}")
            return None

        if hist is None or hist.empty or "Close" not in hist:
            logger.warning(f"No price data for {yf_symbol}")
            return None

        closes = hist["Close"].dropna()
        if closes.empty:
            return None

        close = float(closes.iloc[-1])
        if close <= 0:
            return None
        return Decimal(str(close)).quantize(Decimal("0.01"))
