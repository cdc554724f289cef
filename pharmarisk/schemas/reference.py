"""Reference data: drug catalog, derived price profiles, production batches."""

from datetime import date

from pydantic import Field, model_validator

from pharmarisk.schemas.base import Record
from pharmarisk.schemas.complaint import BatchComplaint


class DrugCatalogEntry(Record):
    """One medication from the curated catalog."""

    id: str
    name: str
    generic_name: str = ""
    manufacturer: str = ""
    dosage: str = ""
    price: float = Field(default=0.0, ge=0)
    currency: str = "UZS"


class DrugPriceReference(Record):
    """Per-drug statistical price profile used by the anomaly scorer."""

    drug_id: str
    generic_name: str
    average_price: float = Field(ge=0)
    min_price: float = Field(ge=0)
    max_price: float = Field(ge=0)
    std_deviation: float = Field(ge=0)
    price_history: tuple[float, ...] = ()
    currency: str = "UZS"

    @model_validator(mode="after")
    def _check_bounds(self) -> "DrugPriceReference":
        if not (self.min_price <= self.average_price <= self.max_price):
            raise ValueError(
                f"{self.drug_id}: expected min <= average <= max, got "
                f"{self.min_price} / {self.average_price} / {self.max_price}"
            )
        return self


class BatchInfo(Record):
    """A production lot."""

    batch_number: str
    drug_id: str
    drug_name: str
    manufacturer: str
    production_date: date
    expiration_date: date


class ReferenceDataset(Record):
    """A versioned snapshot of everything the engine reads.

    Replaced wholesale on reload; never edited in place.
    """

    version: str
    drugs: tuple[DrugCatalogEntry, ...] = ()
    batches: tuple[BatchInfo, ...] = ()
    complaints: tuple[BatchComplaint, ...] = ()
