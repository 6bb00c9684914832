"""Static directory of supported cities."""

from typing import Dict, List, Tuple

from cwa_forecast.weather.models import CityEntry

# City ID -> CWA locationName, in display order
CITY_MAP: Tuple[Tuple[str, str], ...] = (
    ("taipei", "臺北市"),
    ("new-taipei", "新北市"),
    ("taoyuan", "桃園市"),
    ("taichung", "臺中市"),
    ("tainan", "臺南市"),
    ("kaohsiung", "高雄市"),
    ("keelung", "基隆市"),
    ("hsinchu", "新竹市"),
    ("hsinchu-county", "新竹縣"),
    ("chiayi", "嘉義市"),
    ("chiayi-county", "嘉義縣"),
    ("miaoli", "苗栗縣"),
    ("changhua", "彰化縣"),
    ("nantou", "南投縣"),
    ("yunlin", "雲林縣"),
    ("pingtung", "屏東縣"),
    ("yilan", "宜蘭縣"),
    ("hualien", "花蓮縣"),
    ("taitung", "臺東縣"),
    ("penghu", "澎湖縣"),
    ("kinmen", "金門縣"),
    ("lienchiang", "連江縣"),
)


class CityDirectory:
    """Read-only lookup from short city IDs to CWA location names."""

    def __init__(self, cities: Tuple[Tuple[str, str], ...] = CITY_MAP):
        self._entries: Tuple[CityEntry, ...] = tuple(
            CityEntry(id=city_id, name=name) for city_id, name in cities
        )
        self._by_id: Dict[str, str] = {}
        for entry in self._entries:
            if entry.id in self._by_id:
                raise ValueError(f"Duplicate city id: {entry.id}")
            self._by_id[entry.id] = entry.localized_name

    def resolve(self, token: str) -> str:
        """Map a city ID to its CWA location name.

        Lookup is case-insensitive. Unknown tokens are returned unchanged so
        callers can pass a location name such as '高雄市' directly.

        Args:
            token: City ID or location name

        Returns:
            CWA location name
        """
        return self._by_id.get(token.lower(), token)

    def list_all(self) -> List[CityEntry]:
        """Return all supported cities in definition order."""
        return list(self._entries)


# Shared, immutable after import
city_directory = CityDirectory()
