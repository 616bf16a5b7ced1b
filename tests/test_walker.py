import itertools
import random

import pytest

from bsptile.tiling.node import Internal, Leaf, iter_leaves
from bsptile.tiling.rect import Rect
from bsptile.tiling.rewrite import InsertPosition, insert_relative, remove_node, split
from bsptile.tiling.walker import find_rect, layout, leaf_at, walk

CANVAS = Rect(0, 0, 800, 600)


def _tree():
    a, b, c = Leaf((1, 1, 1)), Leaf((2, 2, 2)), Leaf((3, 3, 3))
    inner = Internal(b, c, False)
    return a, b, c, inner, Internal(a, inner, True)


def test_single_leaf_gets_whole_canvas():
    leaf = Leaf((0, 0, 0))
    assert list(walk(leaf, CANVAS)) == [(leaf, CANVAS)]


def test_nested_split_geometry():
    a, b, c, _inner, root = _tree()
    assert layout(root, CANVAS) == [
        (a, Rect(0, 0, 400, 600)),
        (b, Rect(400, 0, 400, 300)),
        (c, Rect(400, 300, 400, 300)),
    ]


def test_walk_accepts_four_numbers():
    a, b, c, _inner, root = _tree()
    assert list(walk(root, 0, 0, 800, 600)) == list(walk(root, CANVAS))


def test_walk_rejects_bad_region():
    with pytest.raises(TypeError):
        list(walk(Leaf((0, 0, 0)), 1, 2))


def test_odd_sizes_still_sum_to_parent():
    a, b, c, _inner, root = _tree()
    rects = [r for _, r in walk(root, Rect(3, 5, 101, 77))]
    assert rects[0].w + rects[1].w == 101
    assert rects[1].h + rects[2].h == 77


def test_leaf_at():
    a, b, c, _inner, root = _tree()
    assert leaf_at(root, CANVAS, 10, 10) == (a, Rect(0, 0, 400, 600))
    assert leaf_at(root, CANVAS, 500, 100)[0] is b
    assert leaf_at(root, CANVAS, 500, 450)[0] is c
    assert leaf_at(root, CANVAS, 400, 300)[0] is c
    assert leaf_at(root, CANVAS, 900, 10) is None


def test_find_rect():
    a, b, c, inner, root = _tree()
    assert find_rect(root, CANVAS, inner) == Rect(400, 0, 400, 600)
    assert find_rect(root, CANVAS, c) == Rect(400, 300, 400, 300)
    assert find_rect(root, CANVAS, root) == CANVAS
    assert find_rect(root, CANVAS, Leaf((3, 3, 3))) is None


def _assert_covers(root, canvas):
    rects = [r for _, r in walk(root, canvas)]
    for r in rects:
        assert canvas.left <= r.left and r.right <= canvas.right
        assert canvas.top <= r.top and r.bottom <= canvas.bottom
    assert sum(r.area for r in rects) == canvas.area
    for r1, r2 in itertools.combinations(rects, 2):
        assert r1.intersection_area(r2) == 0


@pytest.mark.parametrize("seed", range(10))
def test_coverage_after_random_rewrites(seed):
    rng = random.Random(seed)
    canvas = Rect(0, 0, 1279, 719)
    root = Leaf((0, 0, 0))

    for _ in range(40):
        leaves = list(iter_leaves(root))
        target = rng.choice(leaves)
        op = rng.random()
        if op < 0.5:
            root = split(root, target, rng.random() < 0.5, rng)
        elif op < 0.75:
            root = remove_node(root, target)
        else:
            dragging = rng.choice(leaves)
            root = insert_relative(root, target, dragging, rng.choice(list(InsertPosition)))
        _assert_covers(root, canvas)
