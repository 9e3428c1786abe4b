import logging
import math
from affine4 import Matrix4, can_be_inverse, inverse, rotate, scale, translate, vec3, vec4

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    # scale, then rotate about z, then move: left operand applies first
    model = scale(Matrix4(), vec3(2.0, 2.0, 2.0)) \
        @ rotate(Matrix4(), math.pi / 2, vec3(0.0, 0.0, 1.0)) \
        @ translate(Matrix4(), vec3(10.0, 0.0, 0.0))
    print(model)

    p = vec3(1.0, 0.0, 0.0)
    print("point:", model.transform_point(p))
    print("direction:", model.transform_direction(p))

    # homogeneous row vector through the raw product
    print("row vector:", vec4(1.0, 0.0, 0.0, 1.0) @ model)

    if can_be_inverse(model):
        print("round trip:", inverse(model).transform_point(model.transform_point(p)))

    # singular matrices quietly invert to the identity (logged at DEBUG)
    print(inverse(Matrix4(0.0)))
