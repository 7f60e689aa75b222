"""Static fallback records served when no live source is configured."""

from types import MappingProxyType

from osake_mcp.engine.models import SecurityRecord, YearRecord
from osake_mcp.engine.ticker import normalize

DEFAULT_TICKER = "NOKIA.HE"

_RECORDS = (
    SecurityRecord(
        name="Nokia Oyj",
        ticker="NOKIA.HE",
        sector="Teknologia",
        description="Globaali teknologiayritys, 5G-verkkolaitteet ja patentit",
        current_price=4.09,
        peg_ratio=1.23,
        years={
            2021: YearRecord(pe=18.2, pb=1.8, pfcf=22.1, eps=0.21, roe=9.8, ebit=8.2, dy=0.0, dps=0.00, eq=42.1, nettovelka=18.4, revenue=22202, revenue_growth=2.1, earnings_growth=145.2, peg=None),
            2022: YearRecord(pe=14.1, pb=1.6, pfcf=18.4, eps=0.28, roe=11.2, ebit=9.4, dy=0.9, dps=0.02, eq=44.8, nettovelka=15.2, revenue=24911, revenue_growth=12.2, earnings_growth=33.3, peg=0.42),
            2023: YearRecord(pe=9.8, pb=1.2, pfcf=12.2, eps=0.32, roe=13.1, ebit=10.8, dy=1.8, dps=0.06, eq=46.2, nettovelka=12.1, revenue=22278, revenue_growth=-10.5, earnings_growth=14.3, peg=0.68),
            2024: YearRecord(pe=11.4, pb=1.1, pfcf=14.8, eps=0.28, roe=9.8, ebit=8.9, dy=2.2, dps=0.08, eq=48.1, nettovelka=9.8, revenue=22114, revenue_growth=-0.7, earnings_growth=-12.5, peg=None),
            2025: YearRecord(pe=13.2, pb=1.3, pfcf=16.1, eps=0.31, roe=10.4, ebit=9.6, dy=2.4, dps=0.10, eq=49.8, nettovelka=8.4, revenue=22890, revenue_growth=3.5, earnings_growth=10.7, peg=1.23),
        },
    ),
    SecurityRecord(
        name="Sampo Oyj",
        ticker="SAMPO.HE",
        sector="Rahoitus",
        description="Johtava pohjoismainen vakuutusyhtiö, If ja Topdanmark",
        current_price=51.28,
        peg_ratio=1.71,
        years={
            2021: YearRecord(pe=14.8, pb=1.9, pfcf=11.2, eps=3.12, roe=13.2, ebit=18.4, dy=4.2, dps=2.00, eq=38.2, nettovelka=22.1, revenue=4812, revenue_growth=8.4, earnings_growth=22.1, peg=0.67),
            2022: YearRecord(pe=12.2, pb=2.1, pfcf=9.8, eps=3.68, roe=17.1, ebit=21.2, dy=4.8, dps=2.20, eq=36.8, nettovelka=24.4, revenue=5214, revenue_growth=8.4, earnings_growth=17.9, peg=0.68),
            2023: YearRecord(pe=13.4, pb=2.3, pfcf=10.4, eps=3.21, roe=17.4, ebit=22.8, dy=5.1, dps=2.40, eq=37.4, nettovelka=23.8, revenue=5688, revenue_growth=9.1, earnings_growth=-12.8, peg=None),
            2024: YearRecord(pe=14.1, pb=2.2, pfcf=11.8, eps=3.44, roe=15.8, ebit=20.4, dy=5.4, dps=2.70, eq=38.9, nettovelka=21.2, revenue=6012, revenue_growth=5.7, earnings_growth=7.2, peg=1.96),
            2025: YearRecord(pe=13.8, pb=2.4, pfcf=10.9, eps=3.72, roe=17.2, ebit=22.1, dy=5.8, dps=2.95, eq=40.2, nettovelka=19.8, revenue=6401, revenue_growth=6.5, earnings_growth=8.1, peg=1.71),
        },
    ),
    SecurityRecord(
        name="KONE Oyj",
        ticker="KNEBV.HE",
        sector="Teollisuus",
        description="Hissit, liukuportaat ja älyrakennusratkaisut maailmanlaajuisesti",
        current_price=48.88,
        peg_ratio=3.50,
        years={
            2021: YearRecord(pe=38.4, pb=14.2, pfcf=32.8, eps=1.88, roe=38.2, ebit=12.8, dy=2.8, dps=1.65, eq=28.4, nettovelka=-12.4, revenue=10484, revenue_growth=11.2, earnings_growth=18.4, peg=2.09),
            2022: YearRecord(pe=28.1, pb=11.4, pfcf=24.2, eps=1.92, roe=34.8, ebit=11.4, dy=3.2, dps=1.75, eq=26.8, nettovelka=-8.2, revenue=10906, revenue_growth=4.0, earnings_growth=2.1, peg=13.38),
            2023: YearRecord(pe=24.8, pb=10.8, pfcf=21.4, eps=1.74, roe=32.4, ebit=10.8, dy=3.6, dps=1.78, eq=27.2, nettovelka=-6.4, revenue=10704, revenue_growth=-1.8, earnings_growth=-9.4, peg=None),
            2024: YearRecord(pe=26.4, pb=11.2, pfcf=22.8, eps=1.81, roe=33.8, ebit=11.6, dy=3.8, dps=1.85, eq=28.8, nettovelka=-9.8, revenue=11124, revenue_growth=3.9, earnings_growth=4.0, peg=6.60),
            2025: YearRecord(pe=25.2, pb=10.9, pfcf=21.9, eps=1.94, roe=35.2, ebit=12.2, dy=4.0, dps=1.95, eq=29.4, nettovelka=-11.2, revenue=11602, revenue_growth=4.3, earnings_growth=7.2, peg=3.50),
        },
    ),
    SecurityRecord(
        name="Neste Oyj",
        ticker="NESTE.HE",
        sector="Energia",
        description="Uusiutuvan dieselin ja kerosiinin maailmanjohtaja",
        current_price=20.98,
        peg_ratio=0.73,
        years={
            2021: YearRecord(pe=22.4, pb=4.8, pfcf=18.4, eps=1.84, roe=21.4, ebit=11.8, dy=1.8, dps=0.72, eq=48.2, nettovelka=14.2, revenue=11822, revenue_growth=28.4, earnings_growth=48.2, peg=0.46),
            2022: YearRecord(pe=14.8, pb=5.2, pfcf=12.4, eps=3.18, roe=38.2, ebit=18.4, dy=2.2, dps=1.01, eq=44.8, nettovelka=22.4, revenue=22936, revenue_growth=93.9, earnings_growth=72.8, peg=0.20),
            2023: YearRecord(pe=16.2, pb=4.4, pfcf=14.2, eps=2.84, roe=28.4, ebit=14.8, dy=2.8, dps=1.05, eq=42.4, nettovelka=28.4, revenue=20522, revenue_growth=-10.5, earnings_growth=-10.7, peg=None),
            2024: YearRecord(pe=18.8, pb=2.8, pfcf=22.4, eps=1.24, roe=9.8, ebit=6.4, dy=3.4, dps=0.71, eq=38.8, nettovelka=38.4, revenue=16408, revenue_growth=-20.0, earnings_growth=-56.3, peg=None),
            2025: YearRecord(pe=14.2, pb=2.4, pfcf=14.8, eps=1.48, roe=11.2, ebit=8.2, dy=3.8, dps=0.80, eq=40.2, nettovelka=34.2, revenue=17204, revenue_growth=4.8, earnings_growth=19.4, peg=0.73),
        },
    ),
    SecurityRecord(
        name="Fortum Oyj",
        ticker="FORTUM.HE",
        sector="Energia",
        description="Pohjoismainen energiayhtiö, vesivoima ja sähkömarkkinat",
        current_price=12.74,
        peg_ratio=1.16,
        years={
            2021: YearRecord(pe=14.2, pb=1.8, pfcf=12.4, eps=1.12, roe=12.8, ebit=14.4, dy=3.2, dps=0.51, eq=34.8, nettovelka=42.4, revenue=6191, revenue_growth=22.4, earnings_growth=18.4, peg=0.77),
            2022: YearRecord(pe=8.4, pb=1.2, pfcf=6.8, eps=1.84, roe=14.8, ebit=16.2, dy=2.4, dps=0.46, eq=28.4, nettovelka=84.8, revenue=24921, revenue_growth=302.5, earnings_growth=64.3, peg=0.13),
            2023: YearRecord(pe=11.4, pb=1.1, pfcf=9.8, eps=1.04, roe=9.8, ebit=11.4, dy=1.2, dps=0.23, eq=32.4, nettovelka=68.4, revenue=8484, revenue_growth=-66.0, earnings_growth=-43.5, peg=None),
            2024: YearRecord(pe=12.8, pb=1.2, pfcf=11.4, eps=0.98, roe=9.4, ebit=12.8, dy=2.2, dps=0.30, eq=36.2, nettovelka=52.4, revenue=7902, revenue_growth=-6.9, earnings_growth=-5.8, peg=None),
            2025: YearRecord(pe=11.8, pb=1.3, pfcf=10.8, eps=1.08, roe=10.4, ebit=13.4, dy=2.8, dps=0.36, eq=38.4, nettovelka=48.2, revenue=8284, revenue_growth=4.8, earnings_growth=10.2, peg=1.16),
        },
    ),
)

FALLBACK_RECORDS = MappingProxyType({record.ticker: record for record in _RECORDS})


def fallback_record(ticker: str) -> SecurityRecord | None:
    """Static record for a ticker, or None when it is not in the set."""
    return FALLBACK_RECORDS.get(normalize(ticker))


def default_fallback() -> SecurityRecord:
    """Record shown when nothing better is available."""
    return FALLBACK_RECORDS[DEFAULT_TICKER]
