"""PetWiki: dog and cat breed encyclopedia with an AI pet gallery."""

__version__ = "0.1.0"
