import json

import pytest

from roomkit import Item, ItemCollection, ItemProps, RoomState, WallSide


@pytest.fixture
def state(placement):
    return RoomState(placement)


def test_collection_edits_return_new_snapshots():
    a, b = Item("a", "chair"), Item("b", "bed")
    base = ItemCollection([a])
    grown = base.added(b)
    assert base.ids() == ["a"]
    assert grown.ids() == ["a", "b"]
    moved = grown.replaced(a.moved(1.0, 0.0, 1.0))
    assert grown.get("a").position == (0.0, 0.0, 0.0)
    assert moved.get("a").position == (1.0, 0.0, 1.0)
    assert moved.ids() == ["a", "b"]
    assert "a" not in moved.removed("a")
    assert len(moved.removed("a")) == 1


def test_replacing_unknown_item_returns_same_snapshot():
    base = ItemCollection([Item("a", "chair")])
    assert base.replaced(Item("zz", "chair")) is base
    assert base.get(None) is None


def test_save_payload_shape(state, placement):
    rug = Item("rug-1", "rug", position=(0.5, 0.0, -0.25), rotation_y=0.3, scale=1.1,
               props=ItemProps(rug_w=2.0, rug_d=1.4, rug_color="#AABBCC"))
    data = state.serialize(ItemCollection([rug]), theme_idx=2, zoom=140)
    assert data["version"] == 1
    assert data["themeIdx"] == 2
    assert data["zoom"] == 140
    saved = data["items"][0]
    assert saved["rotationY"] == 0.3
    assert saved["position"] == [0.5, 0.0, -0.25]
    assert saved["props"] == {"rugW": 2.0, "rugD": 1.4, "rugColor": "#AABBCC"}
    json.dumps(data)


def test_load_restores_items_and_settings(state, placement):
    bed = Item("bed-1", "bed", position=(1.0, 0.0, 1.0), props=ItemProps(bed_sheet="#FFFFFF"))
    win = placement.constrain(placement.spawn("window-1", "window"), (1.5, 1.6, 0.0))
    data = json.loads(json.dumps(state.serialize(ItemCollection([bed, win]), 3, 90)))
    items, theme, zoom = state.deserialize(data)
    assert items.ids() == ["bed-1", "window-1"]
    assert items.get("bed-1") == bed
    assert items.get("window-1").position == pytest.approx(win.position)
    assert items.get("window-1").props.wall == WallSide.BACK
    assert (theme, zoom) == (3, 90.0)


def test_load_reseats_wall_items(state, room):
    data = {"items": [
        {"id": "f", "type": "frame", "position": [1.0, 9.0, 2.9], "props": {"wall": "left"}},
        {"id": "m", "type": "mirror", "position": [0.4, 1.0, 0.0]},
    ]}
    items, _, _ = state.deserialize(data)
    frame, mirror = items.get("f"), items.get("m")
    assert frame.position == pytest.approx((room.left_front_x, 2.4, 2.8))
    assert mirror.position == pytest.approx((0.4, 1.0, room.back_front_z))
    assert mirror.props.wall == WallSide.BACK


def test_unknown_types_and_props_are_skipped(state):
    data = {"items": [
        {"id": "x", "type": "spaceship", "position": [0, 0, 0]},
        {"id": "c", "type": "chair", "position": [0, 0, 0], "props": {"wood": "dark", "glow": True}},
    ]}
    items, theme, zoom = state.deserialize(data)
    assert items.ids() == ["c"]
    assert items.get("c").props.wood == "dark"
    assert theme is None and zoom is None


@pytest.mark.parametrize("bad", [
    [],
    {"items": {"a": 1}},
    {"items": [{"type": "chair"}]},
    {"items": [{"id": "c", "type": "chair", "position": [0, 0]}]},
])
def test_malformed_save_raises_value_error(state, bad):
    with pytest.raises(ValueError):
        state.deserialize(bad)


def test_load_constrains_floor_items_and_scale(state, room):
    data = {"items": [
        {"id": "c", "type": "chair", "position": [50, 9, -50], "scale": 40},
        {"id": "p", "type": "plant", "position": [0.3, 0.0, 0.1], "scale": 0.01},
    ]}
    items, _, _ = state.deserialize(data)
    chair, plant = items.get("c"), items.get("p")
    assert chair.position == pytest.approx((3.0, 0.0, -3.0))
    assert chair.scale == room.scale_max
    assert plant.position == pytest.approx((0.25, 0.0, 0.0))
    assert plant.scale == room.scale_min


def test_load_derives_stack_height_from_supports(state):
    data = {"items": [
        {"id": "tv", "type": "tv", "position": [0.0, 7.0, 0.0]},
        {"id": "lamp", "type": "lamp", "position": [2.0, 7.0, 2.0]},
        {"id": "desk", "type": "desk", "position": [0.0, 0.0, 0.0]},
    ]}
    items, _, _ = state.deserialize(data)
    assert items.ids() == ["tv", "lamp", "desk"]
    assert items.get("tv").y == pytest.approx(0.65 - 0.11 + 0.001)
    assert items.get("lamp").y == 0.0
