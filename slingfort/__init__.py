"""A slingshot arcade game with falling block towers, enemies to topple and a classic mode."""

__version__ = "0.1.0"