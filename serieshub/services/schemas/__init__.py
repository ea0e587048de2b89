from serieshub.services.schemas.series import (
    GenreRead,
    DemographyRead,
    TitleRead,
    SeriesWrite,
    SeriesCreate,
    SeriesCreateComplete,
    SeriesUpdate,
    SeriesRead,
    GenreIds,
    TitleNames,
    TitleIds,
    CommandRead,
    SeriesCommandRead,
    ImageCommandRead,
    TitlesCommandRead,
)

__all__ = [
    "GenreRead",
    "DemographyRead",
    "TitleRead",
    "SeriesWrite",
    "SeriesCreate",
    "SeriesCreateComplete",
    "SeriesUpdate",
    "SeriesRead",
    "GenreIds",
    "TitleNames",
    "TitleIds",
    "CommandRead",
    "SeriesCommandRead",
    "ImageCommandRead",
    "TitlesCommandRead",
]
