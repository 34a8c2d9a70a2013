# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from chartlay.dimension import unit_env
from chartlay.position import box, box_xywh, pos, UnresolvedError
from utest import utest, utest_exc, utest_val


env = unit_env(800, 400)

p = pos('10px', '20px').resolve(env)
utest((10.0, 20.0), p.xy)
utest((50.0, 20.0), p.right_by('5vw').xy)
utest((-30.0, 20.0), p.left_by('5vw').xy)
utest((10.0, 30.0), p.below_by(10).xy)
utest((10.0, 12.0), p.above_by('2vh').xy)
utest((15.0, 25.0), p.relative(5).xy)
utest((20.0, 40.0), p.towards(pos(30, 60), 0.5).xy)
utest((20.0, 60.0), p.towards(pos(30, 60), 0.5, 1).xy)
utest((40.0, 80.0), p.plus(pos(30, 60)).xy)
utest((-20.0, -40.0), p.minus(pos(30, 60)).xy)

# Unresolved positions defer; resolution may happen before or after derivation.
utest_exc(UnresolvedError, pos(1, 2).x)
utest_exc(UnresolvedError, pos(1, 2).right_by(3).xy)
utest((4.0, 2.0), pos(1, 2).right_by(3).resolve(env).xy)
utest_val(pos('10vw', 0).right_by('1vw').resolve(env).xy(), pos('10vw', 0).resolve(env).right_by('1vw').xy(),
  'resolve before or after derivation')

utest(5.0, pos(3, 4).resolve(env).length)
utest((6.0, 8.0), pos(3, 4).resolve(env).with_length(10).xy)
utest((0.0, 0.0), pos(0, 0).resolve(env).with_length(5).xy)

utest(0, pos(1, 1).resolve(env).quadrant)
utest(1, pos(-1, 1).resolve(env).quadrant)
utest(2, pos(-1, -1).resolve(env).quadrant)
utest(3, pos(1, -1).resolve(env).quadrant)
utest(0, pos(0, 0).resolve(env).quadrant)

for exp, (x, y) in enumerate([(2, 1), (1, 2), (-1, 2), (-2, 1), (-2, -1), (-1, -2), (1, -2), (2, -1)]):
  utest(exp, pos(x, y).resolve(env).octant)

utest(0, pos(1, 1).resolve(env).octant) # Diagonals fall in the lower octant of the pair.
utest(2, pos(-1, 1).resolve(env).octant)


b = box(pos(100, 50), pos(10, 20)).resolve(env)
utest((20.0, 10.0, 50.0, 100.0), b.tlbr)
utest((10.0, 20.0, 90.0, 30.0), b.xywh)
utest((55.0, 35.0), b.center().xy)
utest((100.0, 20.0), b.top_right().xy)
utest((10.0, 50.0), b.bottom_left().xy)

b = box(10, 20, 110, 70).resolve(env)
utest((15.0, 25.0, 90.0, 40.0), b.inside_box(5).xywh)
utest((0.0, 18.0, 120.0, 54.0), b.inside_box(-10, -2).xywh)
utest((0.0, 18.0, 120.0, 54.0), b.outside_box(10, 2).xywh)
utest((10.0, 20.0, 100.0, 50.0), box(110, 70, 10, 20).resolve(env).xywh) # Edges are normalized.

# Insetting and then outsetting by less than half the smaller side restores the box.
for d in [0, 1, 5, 12.5, 24, '2vmin', '1vw']:
  utest_val(b.tlbr(), b.inside_box(d).outside_box(d).tlbr(), f'inside then outside by {d!r}')

# Edges that cross over are swapped.
utest((40.0, 50.0, 50.0, 70.0), b.inside_box(60, 30).tlbr)
utest((50.0, 40.0, 20.0, 10.0), b.inside_box(60, 30).xywh)
utest((50.0, 20.0, 20.0, 50.0), b.outside_box(-60, 0).xywh)
for dx, dy in [(60, 30), (200, 0), (0, 100), ('50vw', '50vh')]:
  inset = b.inside_box(dx, dy)
  utest_val(True, inset.left() <= inset.right() and inset.top() <= inset.bottom(), f'normalized after inside_box({dx!r}, {dy!r})')

utest(True, b.contains, pos(10, 20).resolve(env))
utest(False, b.contains, pos(9, 20).resolve(env))
utest(True, b.intersects, box(100, 60, 200, 200).resolve(env))
utest(False, b.intersects, box(110, 20, 200, 70).resolve(env)) # Touching.

utest_exc(UnresolvedError, box(0, 0, 1, 1).width)
utest(4.0, box(0, 0, '1vmin', 1).resolve(env).width)

# A box built from a resolved corner inherits its environment.
utest((0.0, 0.0, 8.0, 4.0), box(pos(0, 0).resolve(env), pos('1vw', '1vh')).xywh)

utest((5.0, 5.0, 10.0, 20.0), box_xywh(15, 25, -10, -20, env).xywh)
utest_exc(TypeError, box, 1, 2)
utest_exc(TypeError, box, 1, 2, 3)
