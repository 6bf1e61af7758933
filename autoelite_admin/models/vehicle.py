from typing import List

from pydantic import BaseModel, ConfigDict, Field


class VehicleImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    vehicle_id: int
    image_url: str
    cloudflare_id: str | None = None
    is_primary: bool = False
    display_order: int = 0
    created_at: str | None = None


class Vehicle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    trim: str | None = None
    price: float | None = None
    mileage: int | None = None
    vin: str | None = None
    exterior_color: str | None = None
    interior_color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    engine: str | None = None
    drivetrain: str | None = None
    body_style: str | None = None
    condition: str | None = None
    seats: int | None = None

    # Owning dealer
    dealer_id: int | None = None

    description: str | None = None
    features: str | None = None
    status: str | None = None
    featured: bool = False
    created_at: str | None = None
    updated_at: str | None = None
    images: List[VehicleImage] | None = Field(default_factory=list)

    def ordered_images(self) -> List[VehicleImage]:
        """Images in the order they should be rendered."""
        return sorted(self.images or [], key=lambda image: image.display_order)

    def primary_image(self) -> VehicleImage | None:
        """
        The image flagged primary, or the first one by display order.
        At-most-one-primary is the backend's job; the first flagged one wins here.
        """
        ordered = self.ordered_images()
        for image in ordered:
            if image.is_primary:
                return image
        return ordered[0] if ordered else None
