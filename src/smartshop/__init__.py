"""SmartShop app store client data layer."""

__version__ = "0.1.0"
