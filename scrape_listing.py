#!/usr/bin/env python3
from step1_scrape_listing import run, LISTING_URL

if __name__ == "__main__":
    df = run(url=LISTING_URL)
    print("Listing shape:", df.shape)
