"""Insurance policy design: validation and orchestration over a CRM record gateway."""

__version__ = "0.1.0"
