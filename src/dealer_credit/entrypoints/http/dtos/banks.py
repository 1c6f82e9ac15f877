from pydantic import BaseModel, ConfigDict, Field


class BankOfferDTO(BaseModel):
    """A bank's auto credit offer. Percentages are annual decimal strings."""

    id: int = Field(description="Catalog identifier", examples=[1])
    name: str = Field(description="Bank name", examples=["BBVA"])
    annual_rate_percent: str = Field(
        description="Nominal annual interest rate in percent", examples=["12.5"]
    )
    cat_percent: str = Field(
        description="CAT (Costo Anual Total) in percent", examples=["16.2"]
    )
    opening_commission_percent: str = Field(
        description="One-time opening commission on the financed amount, in percent",
        examples=["2.0"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "BBVA",
                "annual_rate_percent": "12.5",
                "cat_percent": "16.2",
                "opening_commission_percent": "2.0",
            }
        }
    )


class BankOfferListResponseDTO(BaseModel):
    """Response with every bank offer in catalog order."""

    banks: list[BankOfferDTO]
    total: int = Field(description="Number of offers", examples=[10])
