import asyncio
import unittest

from fakes import BASE, PAGE_2, FakeResponse, make_client, planet_record, tatooine_routes
from planetlib.store import PlanetStore


class PlanetStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_refresh_builds_sorted_enriched_collection(self) -> None:
        client, _ = make_client(tatooine_routes())
        store = PlanetStore(client=client, base_url=BASE)
        self.assertTrue(store.is_loading)
        await store.refresh()
        self.assertFalse(store.is_loading)
        self.assertIsNone(store.error)
        self.assertEqual([p.name for p in store.planets], ["Alderaan", "Tatooine", "Yavin IV"])
        tatooine = store.planets[1]
        self.assertEqual(tatooine.residents, ["Luke Skywalker", "Unknown Resident"])
        self.assertEqual(tatooine.population, 200000)
        self.assertEqual(store.planets[2].residents, ["No notable residents"])
        self.assertEqual(store.planets[2].primary_climate, "temperate")
        self.assertEqual(
            store.unique_terrains,
            ["desert", "grasslands", "jungle", "mountains", "rainforests"],
        )

    async def test_filters_drive_filtered_view(self) -> None:
        client, _ = make_client(tatooine_routes())
        store = PlanetStore(client=client, base_url=BASE)
        await store.refresh()
        store.set_search_term("luke")
        self.assertEqual([p.name for p in store.filtered_planets], ["Tatooine"])
        store.set_search_term("")
        store.set_terrain_filter("desert")
        self.assertEqual([p.name for p in store.filtered_planets], ["Tatooine"])
        store.set_terrain_filter(None)
        self.assertEqual(len(store.filtered_planets), 3)

    async def test_page_failure_reports_error_and_keeps_collection(self) -> None:
        routes = tatooine_routes()
        routes[PAGE_2] = FakeResponse(500, {"detail": "boom"}, reason="Internal Server Error")
        client, session = make_client(routes)
        store = PlanetStore(client=client, base_url=BASE)
        with self.assertLogs("planetlib.store", level="ERROR"):
            await store.refresh()
        self.assertFalse(store.is_loading)
        self.assertEqual(store.error, "HTTP 500 Internal Server Error")
        self.assertEqual(store.planets, [])
        self.assertFalse(any("people" in url for url in session.calls))

    async def test_recrawl_replaces_collection_and_resets_filters(self) -> None:
        routes = tatooine_routes()
        client, session = make_client(routes)
        store = PlanetStore(client=client, base_url=BASE)
        await store.refresh()
        first = store.planets
        store.set_search_term("luke")
        store.set_terrain_filter("desert")
        await store.refresh()
        self.assertIsNot(store.planets, first)
        self.assertEqual(store.search_term, "")
        self.assertEqual(store.terrain_filter, "")
        self.assertEqual(len(store.filtered_planets), 3)

    async def test_failed_recrawl_keeps_previous_collection(self) -> None:
        routes = tatooine_routes()
        client, session = make_client(routes)
        store = PlanetStore(client=client, base_url=BASE)
        await store.refresh()
        session.routes[BASE] = FakeResponse(503, {"detail": "down"}, reason="Service Unavailable")
        with self.assertLogs("planetlib.store", level="ERROR"):
            await store.refresh()
        self.assertEqual(store.error, "HTTP 503 Service Unavailable")
        self.assertEqual([p.name for p in store.planets], ["Alderaan", "Tatooine", "Yavin IV"])

    async def test_loading_reported_as_soon_as_refresh_starts(self) -> None:
        client, _ = make_client(tatooine_routes())
        store = PlanetStore(client=client, base_url=BASE)
        await store.refresh()
        self.assertFalse(store.is_loading)
        task = asyncio.ensure_future(store.refresh())
        await asyncio.sleep(0)
        self.assertTrue(store.is_loading)
        await task
        self.assertFalse(store.is_loading)

    async def test_overlapping_pages_keep_first_copy_of_each_name(self) -> None:
        hoth_first = planet_record("Hoth", population="unknown", terrain="tundra, ice caves")
        hoth_again = planet_record("Hoth", population="5", terrain="swamp")
        routes = {
            BASE: {"next": PAGE_2, "results": [hoth_first, planet_record("Dagobah", population="0")]},
            PAGE_2: {"next": None, "results": [hoth_again]},
        }
        client, _ = make_client(routes)
        store = PlanetStore(client=client, base_url=BASE)
        with self.assertLogs("planetlib.store", level="WARNING") as logs:
            await store.refresh()
        self.assertEqual([p.name for p in store.planets], ["Dagobah", "Hoth"])
        self.assertEqual(store.planets[1].terrain, "tundra, ice caves")
        self.assertTrue(any("Duplicate planet" in line for line in logs.output))

    async def test_concurrent_refresh_joins_the_running_one(self) -> None:
        client, session = make_client(tatooine_routes())
        store = PlanetStore(client=client, base_url=BASE)
        first, second = await asyncio.gather(store.refresh(), store.refresh())
        self.assertIs(first, second)
        self.assertEqual(session.calls.count(BASE), 1)
        self.assertFalse(store.is_loading)


if __name__ == "__main__":
    unittest.main()
