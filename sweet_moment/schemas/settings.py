"""
Away mode settings, as supplied by the site settings provider.

The pricing engine never consults these. The HTTP layer uses them to refuse
new cart lines and quantity increases while the shop is away.
"""

from pydantic import BaseModel, ConfigDict, Field


class AwayModeSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = False
    disable_orders: bool = Field(default=False, alias="disableOrders")
    message: str = ""
    show_return_date: bool = Field(default=False, alias="showReturnDate")
    return_date: str = Field(default="", alias="returnDate")

    @property
    def orders_disabled(self) -> bool:
        """Orders are only blocked when away mode is on AND set to block them."""
        return self.enabled and self.disable_orders

    @property
    def disable_reason(self) -> str | None:
        if not self.orders_disabled:
            return None
        return self.message or "Sorry, new orders are currently disabled while we are away."
