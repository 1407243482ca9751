"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from datetime import date

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from src.application.services import reset_services
from src.config import reset_settings
from src.config.settings import ReportSettings
from src.core.entities.locale import PT_BR, NumberLocale


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Fresh settings and service singletons for every test."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def app() -> FastAPI:
    """Application built from the current settings."""
    from src.api.main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create sync test client."""
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def locale() -> NumberLocale:
    return PT_BR


@pytest.fixture
def report_settings() -> ReportSettings:
    """Report settings pinned to the production defaults."""
    return ReportSettings(
        organization_name="CONSÓRCIO AERO MARAGOGI",
        footer_text="Sistema Abastech - Gestão de Frota",
        unicode_font_path=None,
        tank_locations=["Tanque Canteiro 01", "Tanque Canteiro 02"],
        truck_locations=["Comboio 01", "Comboio 02", "Comboio 03"],
    )


@pytest.fixture
def reference_date() -> date:
    return date(2026, 1, 15)


@pytest.fixture
def sample_movement_rows() -> list[dict]:
    """One day of the transactional fuel sheet, as the proxy returns it."""
    return [
        {
            "DATA": "15/01/2026",
            "HORA": "08:00",
            "VEICULO": "CB-01",
            "DESCRICAO": "Comboio Mercedes",
            "MOTORISTA": "João",
            "EMPRESA": "Construtora Ávila",
            "QUANTIDADE": "2.000,00",
            "LOCAL": "Tanque Canteiro 01",
            "TIPO": "Saída",
            "DESTINO": "Comboio 01",
            "KM ANTERIOR": "10.000",
            "KM ATUAL": "10.120",
        },
        {
            "DATA": "15/01/2026",
            "HORA": "09:00",
            "VEICULO": "EQ-07",
            "DESCRICAO": "Escavadeira CAT 320",
            "MOTORISTA": "Ana",
            "EMPRESA": "Beta Ltda",
            "QUANTIDADE": "150,5",
            "QUANTIDADE DE ARLA": "5",
            "LOCAL": "Tanque Canteiro 01",
            "TIPO": "Saída",
            "HORIMETRO ANTERIOR": "1.200,0",
            "HORIMETRO ATUAL": "1.210,0",
        },
        {
            "DATA": "15/01/2026",
            "HORA": "10:00",
            "QUANTIDADE": "10.000",
            "LOCAL": "Tanque Canteiro 02",
            "TIPO": "Entrada",
            "FORNECEDOR": "Petrobras",
        },
        {
            "DATA": "15/01/2026",
            "HORA": "11:00",
            "VEICULO": "CB-01",
            "QUANTIDADE": "2.000",
            "LOCAL": "Comboio 01",
            "TIPO": "Entrada",
            "LOCAL DE ENTRADA": "Tanque Canteiro 01",
        },
        {
            "DATA": "15/01/2026",
            "HORA": "12:00",
            "VEICULO": "CM-03",
            "DESCRICAO": "Caminhão Basculante",
            "MOTORISTA": "Carlos",
            "QUANTIDADE": "80",
            "LOCAL": "Comboio 01",
            "TIPO": "Saída",
        },
        {
            "DATA": "15/01/2026",
            "QUANTIDADE": "99",
            "LOCAL": "Oficina",
            "TIPO": "Saída",
        },
    ]
