import httpx
import pytest

from cnpj_enricher.lookup.http_client import HttpLookupClient

SAMPLE_CNPJ = "49752997000125"


@pytest.fixture()
def sample_record() -> dict[str, object]:
    """Trimmed minhareceita.org response for the sample CNPJ."""
    return {
        "cnpj": SAMPLE_CNPJ,
        "razao_social": "ACME LTDA",
        "nome_fantasia": "ACME",
        "uf": "SP",
        "municipio": "SAO PAULO",
        "capital_social": 1500.75,
        "opcao_pelo_mei": True,
        "opcao_pelo_simples": False,
        "data_inicio_atividade": "2023-02-24",
        "email": None,
        "qsa": [{"nome_socio": "FULANO"}],
    }


@pytest.fixture()
def make_http_client():
    """Build an HttpLookupClient whose requests are answered by `handler`."""
    clients: list[HttpLookupClient] = []

    def _make(handler) -> HttpLookupClient:
        client = HttpLookupClient(
            base_url="https://minhareceita.org",
            timeout_seconds=5,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
