"""
GST calculation service for PayrollHub.

Implements the Indian Goods and Services Tax split:
- Intra-state supply: CGST + SGST, each half of the total GST
- Inter-state supply: IGST, the whole GST amount
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

Number = Union[Decimal, int, float, str]

GSTIN_REGEX = re.compile(r'^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$')

ALLOWED_GST_RATES = (0, 5, 12, 18, 28)
DEFAULT_GST_RATE = 18
DEFAULT_HSN_CODE = '998314'

GST_TYPE_IGST = 'IGST'
GST_TYPE_CGST_SGST = 'CGST+SGST'

STATE_CODE_MAP: Dict[str, str] = {
    '01': 'Jammu and Kashmir',
    '02': 'Himachal Pradesh',
    '03': 'Punjab',
    '04': 'Chandigarh',
    '05': 'Uttarakhand',
    '06': 'Haryana',
    '07': 'Delhi',
    '08': 'Rajasthan',
    '09': 'Uttar Pradesh',
    '10': 'Bihar',
    '11': 'Sikkim',
    '12': 'Arunachal Pradesh',
    '13': 'Nagaland',
    '14': 'Manipur',
    '15': 'Mizoram',
    '16': 'Tripura',
    '17': 'Meghalaya',
    '18': 'Assam',
    '19': 'West Bengal',
    '20': 'Jharkhand',
    '21': 'Odisha',
    '22': 'Chhattisgarh',
    '23': 'Madhya Pradesh',
    '24': 'Gujarat',
    '26': 'Dadra and Nagar Haveli and Daman and Diu',
    '27': 'Maharashtra',
    '29': 'Karnataka',
    '30': 'Goa',
    '31': 'Lakshadweep',
    '32': 'Kerala',
    '33': 'Tamil Nadu',
    '34': 'Puducherry',
    '35': 'Andaman and Nicobar Islands',
    '36': 'Telangana',
    '37': 'Andhra Pradesh',
    '38': 'Ladakh',
}


class GSTCalculator:
    """
    Stateless GST helper.

    All amounts are Decimals rounded to 2 places.
    """

    TWO_PLACES = Decimal('0.01')

    @classmethod
    def _round(cls, value: Decimal) -> Decimal:
        return value.quantize(cls.TWO_PLACES, rounding=ROUND_HALF_UP)

    @classmethod
    def calculate_gst(cls, base_amount: Number, gst_rate: Number, is_igst: bool = False) -> Dict:
        """
        Split GST for a base amount.

        Args:
            base_amount: Amount before GST.
            gst_rate: GST percentage (0, 5, 12, 18, 28).
            is_igst: True for inter-state supply.

        Returns:
            Dict with cgst, sgst, igst, totalGST, totalAmount and gstType.
        """
        base = Decimal(str(base_amount or 0))
        rate = Decimal(str(gst_rate or 0))
        total_gst = cls._round(base * rate / Decimal('100'))

        if is_igst:
            cgst = sgst = Decimal('0.00')
            igst = total_gst
            gst_type = GST_TYPE_IGST
        else:
            cgst = cls._round(total_gst / 2)
            # sgst takes the odd paisa so the halves always add up
            sgst = total_gst - cgst
            igst = Decimal('0.00')
            gst_type = GST_TYPE_CGST_SGST

        return {
            'cgst': cgst,
            'sgst': sgst,
            'igst': igst,
            'totalGST': total_gst,
            'totalAmount': cls._round(base + total_gst),
            'gstType': gst_type,
        }

    @staticmethod
    def is_inter_state(client_state: Optional[str], company_state: Optional[str]) -> bool:
        """True when both states are known and differ (case-insensitive)."""
        client = (client_state or '').strip().lower()
        company = (company_state or '').strip().lower()
        if not client or not company:
            return False
        return client != company

    @staticmethod
    def is_valid_rate(rate: Number) -> bool:
        try:
            return Decimal(str(rate)) in [Decimal(r) for r in ALLOWED_GST_RATES]
        except ArithmeticError:
            return False


def normalize_gstin(gstin: Optional[str]) -> str:
    return (gstin or '').strip().upper()


def validate_gstin(gstin: Optional[str]) -> bool:
    """A blank GSTIN is valid (the field is optional)."""
    value = normalize_gstin(gstin)
    if not value:
        return True
    return bool(GSTIN_REGEX.match(value))


def state_from_gstin(gstin: Optional[str]) -> Optional[str]:
    """Map the 2-digit state code at the start of a GSTIN to the state name."""
    value = normalize_gstin(gstin)
    if len(value) < 2:
        return None
    return STATE_CODE_MAP.get(value[:2])
