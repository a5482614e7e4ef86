"""Command line front end for the hue wheel renderer."""
