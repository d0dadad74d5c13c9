import random

import pytest

from digirain import config
from digirain.attrs import CharAttr, CharLoc, ColorMode, ShadingMode
from digirain.cloud import Cloud
from digirain.config import RainConfig

from conftest import RecordingDisplay


def make_cloud(lines=20, cols=6, **options):
    options.setdefault("density", 0.0)
    return Cloud(
        RecordingDisplay(),
        lines,
        cols,
        RainConfig(**options),
        rng=random.Random(42),
    )


def test_new_cloud_allows_spawning_everywhere():
    cloud = make_cloud(cols=6)

    assert cloud.column_spawn == [True] * 6
    assert cloud.visible_line_count() == 20
    assert cloud.droplet_count() == 0
    assert len(cloud.char_pools) == config.POOL_COUNT
    assert all(len(pool) == 20 for pool in cloud.char_pools)


def test_spawn_binds_droplet_to_column():
    cloud = make_cloud(lines=20)

    droplet = cloud.spawn(3, 1000)

    assert droplet.alive
    assert droplet.column == 3
    assert 9 <= droplet.end_line <= 19
    assert config.TRAIL_LENGTH_RANGE[0] <= droplet.length <= config.TRAIL_LENGTH_RANGE[1]
    assert droplet.chars_per_second in config.SPEED_TIERS
    assert 0 <= droplet.pool_index < config.POOL_COUNT
    assert droplet.epoch is cloud.epoch
    assert cloud.column_spawn[3] is False
    assert cloud.droplet_count() == 1


def test_speed_multiplier_scales_droplets():
    cloud = make_cloud(speed=2.0)

    droplet = cloud.spawn(0, 1000)

    assert droplet.chars_per_second in (16.0, 32.0, 48.0)


def test_notify_sets_column_flag():
    cloud = make_cloud()
    cloud.column_spawn[2] = False

    cloud.notify_column_spawn_eligible(2, True)

    assert cloud.column_spawn[2] is True


def test_full_density_spawns_in_every_column():
    cloud = make_cloud(cols=5, density=1.0)

    cloud.tick(1000)

    assert cloud.droplet_count() == 5
    assert sorted(d.column for d in cloud.droplets) == [0, 1, 2, 3, 4]
    assert cloud.column_spawn == [False] * 5


def test_dead_droplets_are_recycled():
    cloud = make_cloud(lines=20)
    droplet = cloud.spawn(2, 1000)
    droplet.chars_per_second = 1000.0

    now = 1000
    while cloud.droplet_count():
        now += 500
        cloud.tick(now)
        assert now < 20000

    assert droplet.alive is False
    assert droplet.column is None
    assert cloud.column_spawn[2] is True

    reused = cloud.spawn(4, now)
    assert reused is droplet
    assert reused.column == 4


def test_column_stays_closed_while_a_sibling_is_alive():
    cloud = make_cloud(lines=40, cols=1)
    first = cloud.spawn(0, 1000)
    first.chars_per_second = 20.0

    now = 1000
    while not cloud.column_spawn[0]:
        now += 100
        cloud.tick(now)
        assert now < 20000

    second = cloud.spawn(0, now)
    second.chars_per_second = 1.0
    assert cloud.column_spawn[0] is False

    while first in cloud.droplets:
        now += 100
        cloud.tick(now)
        assert now < 20000

    assert second.alive
    assert second.tail_put_line is None
    assert cloud.droplets == [second]
    assert cloud.column_spawn[0] is False


def test_tick_draws_through_display():
    cloud = make_cloud(lines=20)
    cloud.spawn(1, 1000)

    cloud.tick(1500)

    assert cloud.display.calls
    assert all(col == 1 for _, col, _, _, _ in cloud.display.calls)


def test_get_char_reads_live_and_frozen_rows():
    cloud = make_cloud(lines=20)
    pool = cloud.char_pools[3]

    assert cloud.get_char(5, 3, None) == pool[5]
    assert cloud.get_char(5, 3, 12) == pool[12]
    assert cloud.get_char(5, 3, 45) == pool[5]


def test_glyphs_come_from_charset():
    cloud = make_cloud(charset="binary")

    assert set("".join("".join(pool) for pool in cloud.char_pools)) <= {"0", "1"}


def test_head_is_bold_white():
    cloud = make_cloud()

    attr = cloud.get_attr(5, 0, "x", CharLoc.HEAD, 1000, 5, 10)

    assert attr == CharAttr(is_bold=True, color_pair=config.COLOR_HEAD)


def test_tail_is_dim():
    cloud = make_cloud()

    attr = cloud.get_attr(5, 0, "x", CharLoc.TAIL, 1000, 9, 10)

    assert attr == CharAttr(color_pair=config.COLOR_DIM)


@pytest.mark.parametrize(
    ("row", "expected"),
    [
        (19, config.COLOR_BRIGHT),
        (15, config.COLOR_MEDIUM),
        (11, config.COLOR_DIM),
        (0, config.COLOR_DIM),
    ],
)
def test_distance_shading_fades_away_from_head(row, expected):
    cloud = make_cloud(shading=ShadingMode.DISTANCE_FROM_HEAD)

    attr = cloud.get_attr(row, 0, "x", CharLoc.MIDDLE, 1000, 20, 10)

    assert attr.color_pair == expected
    assert attr.is_bold is False


def test_random_shading_stays_in_gradient():
    cloud = make_cloud(shading=ShadingMode.RANDOM)

    pairs = {cloud.get_attr(3, 0, "x", CharLoc.MIDDLE, 1000, 10, 10).color_pair for _ in range(50)}

    assert pairs <= set(config.GRADIENT)


def test_modes_come_from_config():
    cloud = Cloud(
        RecordingDisplay(),
        20,
        4,
        RainConfig(shading=ShadingMode.DISTANCE_FROM_HEAD),
        color_mode=ColorMode.MONO,
    )

    assert cloud.shading_mode() is ShadingMode.DISTANCE_FROM_HEAD
    assert cloud.color_mode() is ColorMode.MONO


def test_resize_drops_droplets():
    cloud = make_cloud(lines=20, cols=6)
    cloud.spawn(0, 1000)
    cloud.spawn(5, 1000)

    cloud.resize(30, 10)

    assert cloud.droplet_count() == 0
    assert cloud.column_spawn == [True] * 10
    assert all(len(pool) == 30 for pool in cloud.char_pools)
    assert cloud.visible_line_count() == 30


def test_seeded_clouds_rain_the_same():
    first = Cloud(RecordingDisplay(), 20, 6, RainConfig(seed=7, density=0.5))
    second = Cloud(RecordingDisplay(), 20, 6, RainConfig(seed=7, density=0.5))

    for now in range(1000, 3000, 100):
        first.tick(now)
        second.tick(now)

    assert first.display.calls == second.display.calls
