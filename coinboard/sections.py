"""Dashboard sections.

Each section fetches its own data and renders it independently, so a failing
upstream call only affects the section that made it.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, NamedTuple, Sequence

from markupsafe import Markup
from pydantic import ValidationError

from .api_client import CoinGeckoAPIError, CoinGeckoClient
from .constants import Defaults, SectionStatus
from .formatting import format_currency, format_percentage
from .report_types import SectionResult
from .schemas import TrendingCoin
from .table import Column, Table, render_table
from .templates import get_template

logger = logging.getLogger("sections")


class Section(NamedTuple):
    name: str
    load: Callable[[], Awaitable[Any]]


def _failed(section: Section, message: str) -> SectionResult:
    return {
        'name': section.name,
        'status': SectionStatus.FAILED,
        'content': None,
        'error': message,
    }


async def run_section(section: Section) -> SectionResult:
    """
    Run a section and capture any failure as its result.

    API and payload-shape errors are expected and logged as errors; anything
    else (e.g. a failing cell function) is logged with its traceback.
    """

    try:
        content = await section.load()
    except (CoinGeckoAPIError, ValidationError) as e:
        logger.error(f"Section '{section.name}' failed: {str(e)}")
        return _failed(section, str(e))
    except Exception as e:
        logger.exception(f"Section '{section.name}' crashed")
        return _failed(section, f"{type(e).__name__}: {str(e)}")

    logger.info(f"Section '{section.name}' rendered")
    return {
        'name': section.name,
        'status': SectionStatus.OK,
        'content': content,
        'error': None,
    }


async def assemble_page(sections: Sequence[Section]) -> List[SectionResult]:
    """Run all sections concurrently; results keep the input order."""

    return list(await asyncio.gather(*(run_section(section) for section in sections)))


def _name_cell(coin: TrendingCoin) -> Markup:
    return Markup(get_template('trending_name_cell.html').render(item=coin.item))


def _change_cell(coin: TrendingCoin) -> Markup:
    change = coin.item.data.price_change_percentage_24h.usd
    return Markup(get_template('trending_change_cell.html').render(
        is_trending_up=change > 0,
        percentage=format_percentage(change),
    ))


TRENDING_COLUMNS: List[Column[TrendingCoin]] = [
    Column(header='Name', cell=_name_cell, cell_class_name='name-cell'),
    Column(header='24h Change', cell=_change_cell, cell_class_name='name-cell'),
    Column(
        header='Price',
        cell=lambda coin: format_currency(coin.item.data.price),
        cell_class_name='price-cell',
    ),
]


def trending_coins_section(client: CoinGeckoClient, limit: int = Defaults.TRENDING_LIMIT) -> Section:
    """Section listing the first `limit` trending coins."""

    async def load() -> Table:
        trending = await client.get_trending()
        return render_table(
            trending.coins[:limit],
            TRENDING_COLUMNS,
            row_key=lambda coin: coin.item.id,
            table_class_name='trending-coins-table',
            header_cell_class_name='py-3!',
            body_cell_class_name='py-2!',
        )

    return Section(name='Trending Coins', load=load)


def render_section_html(result: SectionResult) -> Markup:
    """Markup for one section: its table, or a failure block scoped to it."""

    failed = result['status'] == SectionStatus.FAILED
    content = result['content']
    body = content.to_html() if isinstance(content, Table) else content
    return Markup(get_template('section.html').render(result=result, failed=failed, body=body))
