import numpy as np
import pytest

from raycast.config_models import EmitterConfig, Segment, Vector2, WorldConfig
from raycast.emitter import Emitter, create_ray_directions
from raycast.ray_intersection import nearest_hit_detailed
from raycast.world import build_world


def box_world(width=600, height=600):
    config = WorldConfig(
        width=width,
        height=height,
        num_random_segments=0,
        num_quadrilaterals=0,
        num_triangles=0,
    )
    return build_world(config, np.random.default_rng(0))


def test_default_emitter_has_36_unit_rays():
    emitter = Emitter(EmitterConfig(), Vector2(x=0, y=0))

    assert emitter.num_rays == 36
    for i, direction in enumerate(emitter.directions):
        angle = np.degrees(np.arctan2(direction.y, direction.x)) % 360
        assert angle == pytest.approx(i * 10, abs=1e-9)
        assert direction.length() == pytest.approx(1.0, abs=1e-12)


def test_create_ray_directions_quarter_turns():
    directions = create_ray_directions(num_rays=4, angle_step_degrees=90)
    expected = [(1, 0), (0, 1), (-1, 0), (0, -1)]

    for direction, (x, y) in zip(directions, expected):
        assert direction.x == pytest.approx(x, abs=1e-12)
        assert direction.y == pytest.approx(y, abs=1e-12)


def test_start_angle_offsets_fan():
    directions = create_ray_directions(num_rays=2, angle_step_degrees=180, start_angle_degrees=90)
    assert directions[0].y == pytest.approx(1.0)
    assert directions[1].y == pytest.approx(-1.0)


def test_moving_changes_origins_not_directions():
    emitter = Emitter(EmitterConfig(), Vector2(x=10, y=10))
    before = emitter.get_rays()

    emitter.update(250, 120)
    after = emitter.get_rays()

    assert emitter.position == Vector2(x=250, y=120)
    for old, new in zip(before, after):
        assert old.direction == new.direction
        assert old.origin == Vector2(x=10, y=10)
        assert new.origin == Vector2(x=250, y=120)


def test_look_is_idempotent():
    segments = build_world(WorldConfig(), np.random.default_rng(11))
    emitter = Emitter(EmitterConfig(), Vector2(x=320, y=140))

    assert emitter.look(segments) == emitter.look(segments)


def test_look_inside_box_hits_every_wall_side():
    segments = box_world()
    emitter = Emitter(EmitterConfig(), Vector2(x=100, y=200))

    hits = emitter.look(segments)

    assert len(hits) == 36
    for hit in hits:
        assert hit is not None
        on_border = (
            hit.x == pytest.approx(600)
            or hit.x == pytest.approx(-1)
            or hit.y == pytest.approx(600)
            or hit.y == pytest.approx(-1)
        )
        assert on_border


def test_look_first_ray_hits_right_wall():
    segments = box_world()
    emitter = Emitter(EmitterConfig(), Vector2(x=100, y=200))

    first = emitter.look(segments)[0]

    assert first.x == pytest.approx(600)
    assert first.y == pytest.approx(200)


def test_look_without_walls_reports_no_hits():
    emitter = Emitter(EmitterConfig(num_rays=8, angle_step_degrees=45), Vector2(x=0, y=0))
    assert emitter.look([]) == [None] * 8


def test_look_detailed_matches_look():
    segments = build_world(WorldConfig(), np.random.default_rng(3))
    emitter = Emitter(EmitterConfig(), Vector2(x=420, y=480))

    detailed = emitter.look_detailed(segments)
    assert [result.intersection for result in detailed] == emitter.look(segments)


def test_look_detailed_agrees_with_single_ray_selection():
    segments = build_world(WorldConfig(), np.random.default_rng(21))
    emitter = Emitter(EmitterConfig(), Vector2(x=75, y=510))

    expected = [nearest_hit_detailed(ray, segments) for ray in emitter.get_rays()]
    assert emitter.look_detailed(segments) == expected


def test_look_detailed_with_epsilon():
    segments = build_world(WorldConfig(), np.random.default_rng(21))
    emitter = Emitter(EmitterConfig(), Vector2(x=75, y=510))

    # Every denominator is below a huge tolerance
    assert emitter.look(segments, epsilon=1e9) == [None] * 36


def test_look_requires_obstacle_set():
    emitter = Emitter(EmitterConfig(), Vector2(x=0, y=0))
    with pytest.raises(ValueError):
        emitter.look(None)


def test_nearest_of_two_walls_per_ray():
    segments = [
        Segment.from_coords(7, -10, 7, 10),
        Segment.from_coords(3, -10, 3, 10),
    ]
    emitter = Emitter(EmitterConfig(num_rays=1), Vector2(x=0, y=0))

    [hit] = emitter.look(segments)
    assert hit == Vector2(x=3, y=0)
