"""End-to-end tests for territory map generation."""

import numpy as np
import pytest
from py_territory.core.alea_prng import AleaPRNG
from py_territory.core.seeds import SeedPoint
from py_territory.core.territory import MapConfig, TerritoryMap, generate_territory_map, to_world

COLOR = (0.1, 0.2, 0.3)


class TestWorldMapping:
    """Test grid to world coordinates."""

    def test_even_dimensions(self):
        assert to_world(0, 0, 32, 18) == (-16, -9, 0.0)
        assert to_world(16, 9, 32, 18) == (0, 0, 0.0)

    def test_odd_dimensions_use_integer_half(self):
        assert to_world(0, 0, 5, 3) == (-2, -1, 0.0)

    def test_depth(self):
        assert to_world(1, 1, 2, 2, depth=-3.5) == (0, 0, -3.5)


class TestTerritoryMap:
    """Test the full pipeline."""

    def test_generate(self):
        territory = TerritoryMap(MapConfig(width=32, height=18, zone_count=10, seed="abc"))
        regions = territory.generate()

        assert len(regions) == 10
        assert len(territory.seeds) == 10
        for region in regions:
            assert len(region.triangles) % 3 == 0
            assert all(0 <= i < len(region.vertices) for i in region.triangles)

    def test_same_seed_same_map(self):
        """Test that a seed string reproduces seeds, outlines and meshes."""
        config = MapConfig(width=40, height=24, zone_count=15, seed="abc")
        first = generate_territory_map(config)
        second = generate_territory_map(config)

        assert first.seeds == second.seeds
        np.testing.assert_array_equal(first.label_grid(), second.label_grid())
        for a, b in zip(first.regions, second.regions):
            assert a.edges == b.edges
            assert a.vertices == b.vertices
            assert a.triangles == b.triangles

    def test_injected_prng(self):
        config = MapConfig(width=20, height=10, zone_count=4, seed="ignored")
        territory = TerritoryMap(config)
        territory.generate(AleaPRNG("abc"))

        expected = generate_territory_map(config._replace(seed="abc"))
        assert territory.seeds == expected.seeds

    def test_regenerate_discards_previous(self):
        territory = TerritoryMap(MapConfig(width=20, height=10, zone_count=4, seed="one"))
        old_regions = territory.generate()
        new_regions = territory.generate(AleaPRNG("two"))

        assert len(new_regions) == 4
        assert not any(new is old for new in new_regions for old in old_regions)
        assert territory.regions is new_regions

    @pytest.mark.parametrize("zone_count", [0, 101])
    def test_invalid_zone_count(self, zone_count):
        with pytest.raises(ValueError):
            TerritoryMap(MapConfig(width=10, height=10, zone_count=zone_count))

    def test_label_grid_before_generate(self):
        territory = TerritoryMap(MapConfig(width=10, height=10))
        with pytest.raises(ValueError):
            territory.label_grid()

    def test_region_at(self):
        territory = TerritoryMap(MapConfig(width=4, height=4, zone_count=2))
        territory.build_regions([SeedPoint(0, 0, COLOR), SeedPoint(3, 3, COLOR)])

        assert territory.region_at(1, 1).index == 0
        assert territory.region_at(2, 2).index == 1
        assert territory.region_at(1, 2).index == 0
        assert territory.region_at(2, 1).index == 0
        assert territory.region_at(4, 0) is None
        assert territory.region_at(-1, 0) is None

    def test_zero_area_grid(self):
        territory = TerritoryMap(MapConfig(width=0, height=5, zone_count=3))
        assert territory.generate() == []
        assert territory.meshes() == []

    def test_no_seeds(self):
        territory = TerritoryMap(MapConfig(width=6, height=6, zone_count=1))
        assert territory.build_regions([]) == []
        assert territory.region_at(2, 2) is None


class TestSingleRegionMap:
    """Test a map with one region covering the grid."""

    def test_rectangle_mesh(self):
        territory = TerritoryMap(MapConfig(width=6, height=4, zone_count=1))
        region = territory.build_regions([SeedPoint(4, 0, COLOR)])[0]

        assert len(region.edges) == 2 * 6 + 2 * 4 - 4
        assert region.vertices == [(0, 0), (0, 3), (5, 3), (5, 0)]
        assert len(region.triangles) == 6

        mesh = territory.meshes()[0]
        np.testing.assert_array_equal(
            mesh.vertices,
            np.array([[-3, -2, 0], [-3, 1, 0], [2, 1, 0], [2, -2, 0]], dtype=np.float32),
        )
        np.testing.assert_array_equal(
            mesh.outline, np.array([-3, -2, -3, 1, 2, 1, 2, -2], dtype=np.float32)
        )
        assert mesh.triangle_count == 2
        assert mesh.color == COLOR
        assert mesh.seed == (4, 0)
        assert mesh.world_seed == (1, -2, 0.0)


class TestMeshes:
    """Test mesh buffers for generated maps."""

    @pytest.mark.parametrize("seed", ["abc", "meshes", ""])
    def test_buffers_consistent(self, seed):
        territory = generate_territory_map(MapConfig(width=36, height=20, zone_count=12, seed=seed))

        for mesh, region in zip(territory.meshes(depth=2.0), territory.regions):
            n = len(region.vertices)
            assert mesh.vertices.shape == (n, 3)
            assert mesh.vertices.dtype == np.float32
            assert np.all(mesh.vertices[:, 2] == 2.0)
            assert mesh.outline.shape == (2 * n,)
            assert mesh.triangles.dtype == np.int32
            assert len(mesh.triangles) % 3 == 0
            assert np.all((mesh.triangles >= 0) & (mesh.triangles < max(n, 1)))
