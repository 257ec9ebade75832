"""appforge - turns application blueprints into Next.js source trees."""

__version__ = "0.1.0"
