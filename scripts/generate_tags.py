# scripts/generate_tags.py
"""Pre-generate a sheet of QR asset tags and optionally write their PNGs."""

import argparse
import asyncio
import os

from vdv_inventory.core.errors import InventoryError
from vdv_inventory.crud import asset_tag as tag_crud
from vdv_inventory.db import async_session
from vdv_inventory.services.qr import render_qr_png


async def generate(count: int, out_dir: str = None):
    async with async_session() as session:
        try:
            tags = await tag_crud.generate_batch(session, count)
        except InventoryError as exc:
            print(f"❌ {exc.message}")
            return 1

    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    for tag in tags:
        print(f"🏷️  {tag.token}  {tag.scan_url}")
        if out_dir:
            with open(os.path.join(out_dir, f"{tag.token}.png"), "wb") as fh:
                fh.write(render_qr_png(tag.scan_url))

    print(f"✅ Generated {len(tags)} tag(s).")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Generate unlinked QR asset tags")
    parser.add_argument("count", type=int, help="number of tags (1-100)")
    parser.add_argument("--out", dest="out_dir", help="directory to write one PNG per tag")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(generate(args.count, args.out_dir)))


if __name__ == "__main__":
    main()
