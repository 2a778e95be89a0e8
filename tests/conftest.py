import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from orbit_map.main import app


# Small map with branches, the usual worked example (42 orbits)
REFERENCE_MAP = [
    "COM)B",
    "B)C",
    "C)D",
    "D)E",
    "E)F",
    "B)G",
    "G)H",
    "D)I",
    "E)J",
    "J)K",
    "K)L",
]

# Straight chain COM → B → ... → L (66 orbits)
CHAIN_MAP = [
    "COM)B",
    "B)C",
    "C)D",
    "D)E",
    "E)F",
    "F)G",
    "G)H",
    "H)I",
    "I)J",
    "J)K",
    "K)L",
]


@pytest.fixture
def reference_lines():
    return list(REFERENCE_MAP)


@pytest.fixture
def chain_lines():
    return list(CHAIN_MAP)


# Writes lines to a map file and returns its path
@pytest.fixture
def write_map(tmp_path):
    def _write(lines, name="map_data.txt", newline="\n"):
        path = tmp_path / name
        path.write_bytes(newline.join(lines).encode("utf-8") + newline.encode())
        return path

    return _write


# Client
@pytest_asyncio.fixture(scope="function")
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
