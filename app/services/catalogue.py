# app/services/catalogue.py
# Starter catalogue of well-known mines, loaded into an empty directory.
from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models.mine import Mine
from app.schemas.mine import MineCreate
from app.services.mines import build_mine

logger = logging.getLogger(__name__)

CATALOGUE = (
    # --- Gold ---
    dict(name="Carlin Gold Mine", type="Gold", latitude=40.7128, longitude=-116.1619,
         country="USA", region="Nevada", production="1.2M oz/year",
         description="One of the largest gold mines in the world, operated by Newmont Corporation.",
         website="https://www.newmont.com"),
    dict(name="Grasberg Mine", type="Gold", latitude=-4.0584, longitude=137.1164,
         country="Indonesia", region="Papua", production="2.5M oz gold/year",
         description="World's largest gold mine and second-largest copper mine.",
         website="https://www.fcx.com"),
    dict(name="Muruntau Gold Mine", type="Gold", latitude=41.5333, longitude=64.6167,
         country="Uzbekistan", region="Navoiy", production="2.8M oz/year",
         description="Largest open-pit gold mine in the world by production.",
         website="https://www.ngmk.uz"),
    dict(name="Olimpiada Gold Mine", type="Gold", latitude=55.0167, longitude=88.5167,
         country="Russia", region="Krasnoyarsk", production="1.2M oz/year",
         description="One of Russia's largest gold mines, operated by Polyus.",
         website="https://polyus.com"),
    dict(name="Boddington Gold Mine", type="Gold", latitude=-32.8000, longitude=116.4667,
         country="Australia", region="Western Australia", production="700K oz/year",
         description="Australia's largest gold mine by production.",
         website="https://www.newmont.com"),
    # --- Copper ---
    dict(name="Escondida", type="Copper", latitude=-24.2667, longitude=-69.0833,
         country="Chile", region="Antofagasta", production="1.2M tons copper/year",
         description="World's largest copper mine by production.",
         website="https://www.bhp.com"),
    dict(name="Collahuasi", type="Copper", latitude=-20.9667, longitude=-68.6500,
         country="Chile", region="Tarapacá", production="500K tons copper/year",
         description="One of the world's largest copper deposits.",
         website="https://www.collahuasi.cl"),
    dict(name="Oyu Tolgoi", type="Copper", latitude=43.0167, longitude=106.8667,
         country="Mongolia", region="Ömnögovi", production="500K tons copper/year",
         description="One of the world's largest copper-gold deposits.",
         website="https://ot.mn"),
    dict(name="Olympic Dam", type="Copper", latitude=-30.4444, longitude=136.8869,
         country="Australia", region="South Australia", production="200K tons copper/year",
         description="World's fourth-largest copper deposit and largest uranium deposit.",
         website="https://www.bhp.com"),
    # --- Mixed minerals ---
    dict(name="Olympic Dam", type="Copper, Uranium, Gold", latitude=-30.4444, longitude=136.8869,
         country="Australia", region="South Australia",
         production="200K oz gold/year, 4K tons uranium/year",
         description="Multi-commodity mine producing copper, uranium, gold, and silver.",
         website="https://www.bhp.com"),
    dict(name="Grasberg", type="Copper & Gold", latitude=-4.0584, longitude=137.1164,
         country="Indonesia", region="Papua",
         production="2.5M oz gold/year, 1.2M tons copper/year",
         description="World's largest gold mine and second-largest copper mine.",
         website="https://www.fcx.com"),
    dict(name="Oyu Tolgoi", type="Copper & Gold", latitude=43.0167, longitude=106.8667,
         country="Mongolia", region="Ömnögovi",
         production="500K oz gold/year, 500K tons copper/year",
         description="One of the world's largest copper-gold deposits.",
         website="https://ot.mn"),
    # --- Iron ore ---
    dict(name="Carajás Mine", type="Iron", latitude=-6.0000, longitude=-50.0000,
         country="Brazil", region="Pará", production="150M tons iron ore/year",
         description="World's largest iron ore mine.",
         website="https://www.vale.com"),
    dict(name="Pilbara Operations", type="Iron", latitude=-22.0000, longitude=120.0000,
         country="Australia", region="Western Australia", production="300M tons iron ore/year",
         description="Rio Tinto's major iron ore operations in the Pilbara region.",
         website="https://www.riotinto.com"),
    dict(name="Mount Whaleback", type="Iron", latitude=-23.0000, longitude=119.0000,
         country="Australia", region="Western Australia", production="80M tons iron ore/year",
         description="Australia's largest open-cut iron ore mine.",
         website="https://www.bhp.com"),
    # --- Diamond ---
    dict(name="Jwaneng Mine", type="Diamond", latitude=-24.5167, longitude=24.5167,
         country="Botswana", region="Southern", production="15M carats/year",
         description="World's richest diamond mine by value.",
         website="https://www.debeersgroup.com"),
    dict(name="Orapa Mine", type="Diamond", latitude=-21.3000, longitude=25.4000,
         country="Botswana", region="Central", production="20M carats/year",
         description="World's largest diamond mine by area.",
         website="https://www.debeersgroup.com"),
    dict(name="Catoca Mine", type="Diamond", latitude=-9.4333, longitude=20.3167,
         country="Angola", region="Lunda Sul", production="7M carats/year",
         description="Fourth-largest diamond mine in the world.",
         website="https://www.catoca.com"),
)


def seed_catalogue(db: Session, owner_id: Optional[int]) -> int:
    """
    Load CATALOGUE into an empty mines table, owned by `owner_id`.
    Does nothing if any mine exists. Returns the number of mines added.
    """
    if db.query(Mine.id).first() is not None:
        return 0

    for record in CATALOGUE:
        db.add(build_mine(MineCreate(status="Active", **record), owner_id))
    db.commit()
    logger.info("Seeded %d catalogue mines", len(CATALOGUE))
    return len(CATALOGUE)
