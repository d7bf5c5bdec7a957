import pytest
from decimal import Decimal

from donation_chooser.models import DonationInput, Lot


@pytest.fixture
def etf_input():
    return DonationInput(
        asset_share_prices={"VTI": Decimal("100.22"), "BND": Decimal("12.35")},
        lots=[
            Lot("VTI", "2019-01-02", 13, Decimal("50.55")),
            Lot("VTI", "2019-06-03", 11, Decimal("55.55")),
            Lot("VTI", "2021-11-08", 9, Decimal("120.22")),
            Lot("BND", "2020-03-01", 50, Decimal("10.00")),
        ],
    )


@pytest.fixture
def etf_json():
    return (
        '{"assetSharePrices": {"VTI": 100.22, "BND": 12.35},'
        ' "lots": ['
        '{"assetName": "VTI", "date": "2019-01-02", "shares": 13, "shareCost": 50.55},'
        '{"assetName": "VTI", "date": "2019-06-03", "shares": 11, "shareCost": 55.55},'
        '{"assetName": "VTI", "date": "2021-11-08", "shares": 9, "shareCost": 120.22},'
        '{"assetName": "BND", "date": "2020-03-01", "shares": 50, "shareCost": 10.00}'
        "]}"
    )
