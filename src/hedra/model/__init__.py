"""
The MODEL layer contains pure geometric data structures.
It has NO knowledge of a renderer or a physics engine; those are reached
only through the collaborator protocols in `hedra.model.collision`.
"""
