"""Version metadata for PartyRental."""

__version__ = "1.0.0"
__app_name__ = "Party Rental"
__company__ = "Festa & Cia Locações"
