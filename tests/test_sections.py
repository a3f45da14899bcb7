"""Unit tests for dashboard sections and page assembly."""

import asyncio
import logging
import pytest
from unittest.mock import AsyncMock, Mock

from coinboard.api_client import CoinGeckoAPIError
from coinboard.constants import SectionStatus
from coinboard.schemas import TrendingResponse
from coinboard.sections import (
    Section,
    assemble_page,
    render_section_html,
    run_section,
    trending_coins_section,
)
from coinboard.table import Column, Table, render_table


def trending_payload(count):
    return {
        'coins': [
            {
                'item': {
                    'id': f'coin-{i}',
                    'name': f'Coin {i}',
                    'symbol': f'C{i}',
                    'large': f'https://img.example.test/{i}.png',
                    'market_cap_rank': i,
                    'data': {
                        'price': 1000.5 * (i + 1),
                        'price_change_percentage_24h': {'usd': 1.5 if i % 2 == 0 else -2.25}
                    }
                }
            }
            for i in range(count)
        ]
    }


@pytest.fixture
def client():
    mock_client = Mock()
    mock_client.get_trending = AsyncMock(
        return_value=TrendingResponse.model_validate(trending_payload(8))
    )
    return mock_client


class TestTrendingCoinsSection:
    """Test the trending coins section."""

    def test_renders_first_six(self, client):
        table = asyncio.run(trending_coins_section(client).load())

        assert isinstance(table, Table)
        assert [h.content for h in table.header] == ['Name', '24h Change', 'Price']
        assert [r.key for r in table.rows] == [f'coin-{i}' for i in range(6)]
        assert table.table_class_name == 'trending-coins-table'

    def test_cells(self, client):
        table = asyncio.run(trending_coins_section(client, limit=2).load())

        name, change, price = table.rows[0].cells
        assert '<a href="/coins/coin-0">' in name.content
        assert '<p>Coin 0</p>' in name.content
        assert 'text-green-500' in change.content
        assert '1.50%' in change.content
        assert price.content == '$1,000.50'
        assert price.class_name == 'py-2! price-cell'

        assert 'text-red-500' in table.rows[1].cells[1].content

    def test_empty_trending(self):
        mock_client = Mock()
        mock_client.get_trending = AsyncMock(return_value=TrendingResponse())

        table = asyncio.run(trending_coins_section(mock_client).load())

        assert len(table.header) == 3
        assert table.rows == []


class TestRunSection:
    """Test failure isolation of single sections."""

    def test_ok(self):
        async def load():
            return 'content'

        result = asyncio.run(run_section(Section('Overview', load)))

        assert result['status'] == SectionStatus.OK
        assert result['content'] == 'content'
        assert result['error'] is None

    def test_api_error_becomes_failed_result(self):
        async def load():
            raise CoinGeckoAPIError('API Error: 401: bad key', status_code=401)

        result = asyncio.run(run_section(Section('Overview', load)))

        assert result['status'] == SectionStatus.FAILED
        assert result['content'] is None
        assert result['error'] == 'API Error: 401: bad key'

    def test_validation_error_becomes_failed_result(self):
        async def load():
            return TrendingResponse.model_validate({'coins': [{'item': {'id': 'x'}}]})

        result = asyncio.run(run_section(Section('Trending', load)))

        assert result['status'] == SectionStatus.FAILED

    def test_unexpected_error_becomes_failed_result(self, caplog):
        async def load():
            raise RuntimeError('bug')

        with caplog.at_level(logging.ERROR, logger='sections'):
            result = asyncio.run(run_section(Section('Broken', load)))

        assert result['status'] == SectionStatus.FAILED
        assert result['error'] == 'RuntimeError: bug'
        assert 'Traceback' in caplog.text


class TestAssemblePage:
    """Test page assembly."""

    def test_failing_section_does_not_block_others(self, client):
        async def failing():
            raise CoinGeckoAPIError('API Error: 500: Internal Server Error', status_code=500)

        results = asyncio.run(assemble_page([
            Section('Overview', failing),
            trending_coins_section(client),
        ]))

        assert [r['name'] for r in results] == ['Overview', 'Trending Coins']
        assert results[0]['status'] == SectionStatus.FAILED
        assert results[1]['status'] == SectionStatus.OK
        assert len(results[1]['content'].rows) == 6

    def test_render_failure_does_not_block_others(self, client):
        def broken_cell(row):
            raise TypeError('cell function failed')

        async def broken():
            return render_table([{'id': 1}], [Column(header='X', cell=broken_cell)], lambda r: r['id'])

        async def good():
            return 'overview'

        results = asyncio.run(assemble_page([
            Section('Good', good),
            Section('Bad', broken),
            trending_coins_section(client),
        ]))

        assert [r['status'] for r in results] == [
            SectionStatus.OK, SectionStatus.FAILED, SectionStatus.OK
        ]
        assert results[1]['error'] == 'TypeError: cell function failed'
        assert results[0]['content'] == 'overview'

    def test_no_sections(self):
        assert asyncio.run(assemble_page([])) == []


class TestRenderSectionHtml:

    def test_escapes_coin_fields(self):
        payload = trending_payload(1)
        payload['coins'][0]['item']['name'] = '<script>x</script>'
        mock_client = Mock()
        mock_client.get_trending = AsyncMock(return_value=TrendingResponse.model_validate(payload))

        table = asyncio.run(trending_coins_section(mock_client).load())

        name = table.rows[0].cells[0].content
        assert '<script>' not in name
        assert '&lt;script&gt;x&lt;/script&gt;' in name

    def test_failed_section(self):
        html = render_section_html({
            'name': 'Trending Coins',
            'status': SectionStatus.FAILED,
            'content': None,
            'error': 'API Error: 401: <bad key>',
        })

        assert '<h4>Trending Coins</h4>' in html
        assert '<div class="section-error">API Error: 401: &lt;bad key&gt;</div>' in html

    def test_ok_section(self, client):
        table = asyncio.run(trending_coins_section(client).load())

        html = render_section_html({
            'name': 'Trending Coins',
            'status': SectionStatus.OK,
            'content': table,
            'error': None,
        })

        assert html.startswith('<section><h4>Trending Coins</h4><div data-slot="table-container">')
        assert 'data-key="coin-5"' in html
        assert 'data-key="coin-6"' not in html
