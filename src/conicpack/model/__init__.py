"""
The MODEL layer contains pure data structures and the packing/rendering logic.
It has NO knowledge of the GUI (Qt) or of any export file format.
It deals with Geometry, Noise and the Circle Collection.
"""
