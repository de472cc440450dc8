import pytest

from roomkit.models import Surface
from roomkit.scene import PlanScene, PlanView, from_scene, to_scene


@pytest.fixture
def scene(qapp, editor):
    sc = PlanScene(editor)
    yield sc
    sc.clear()


def test_scene_coordinates_round_trip():
    p = to_scene(1.25, -2.5)
    assert (p.x(), p.y()) == (125.0, -250.0)
    assert from_scene(p) == (1.25, -2.5)


def test_sync_tracks_editor_items(scene, editor):
    chair = editor.add_item("chair")
    scene.sync()
    g = scene.graphic_for(chair.id)
    assert g is not None
    assert (g.pos().x(), g.pos().y()) == pytest.approx((-300.0, -300.0))
    editor.remove_selected()
    scene.sync()
    assert scene.graphic_for(chair.id) is None


def test_press_drag_release_moves_floor_item(scene, editor):
    chair = editor.add_item("chair")
    scene.sync()
    assert scene.press_at(to_scene(chair.x, chair.z)) == chair.id
    assert editor.drag.active
    scene.move_to(to_scene(0.6, 1.1))
    scene.release()
    assert not editor.drag.active
    assert editor.camera.pan_enabled
    assert editor.items.get(chair.id).position == pytest.approx((0.5, 0.0, 1.0))


def test_wall_item_drag_keeps_it_on_the_wall(scene, editor, room):
    win = editor.add_item("window")
    scene.sync()
    scene.press_at(to_scene(win.x, win.z))
    assert editor.drag.state.domain == Surface.BACK
    scene.move_to(to_scene(1.0, 2.0))
    scene.release()
    moved = editor.items.get(win.id)
    assert moved.x == pytest.approx(1.0)
    assert moved.z == room.back_front_z
    assert room.min_height <= moved.y <= room.max_height


def test_press_on_empty_floor_clears_selection(scene, editor):
    editor.add_item("chair")
    scene.sync()
    assert scene.press_at(to_scene(2.0, 2.0)) is None
    assert editor.selected_id is None
    assert not editor.drag.active


def test_move_without_press_changes_nothing(scene, editor):
    editor.add_item("chair")
    scene.sync()
    before = editor.items
    scene.move_to(to_scene(1.0, 1.0))
    assert editor.items is before


def test_view_zoom_follows_camera(scene, editor):
    view = PlanView(scene)
    scales = []
    view.scaleChanged.connect(scales.append)
    editor.zoom_by(+1)
    view.apply_zoom()
    assert scales == [pytest.approx(130 / 120)]
    assert view.transform().m11() == pytest.approx(130 / 120)
