"""Synthetic 30-movie listing page in the classic IMDb advanced-search layout."""

GENRES = ["Action, Adventure, Sci-Fi", "Comedy, Drama", "Drama"]
NO_METASCORE = {1, 2, 3, 16, 28}

ITEM = """
<div class="lister-item mode-advanced">
  <div class="lister-item-content">
    <h3 class="lister-item-header">
      <span class="lister-item-index unbold text-primary">{rank}.</span>
      <a href="/title/tt{rank:07d}/">{title}</a>
      <span class="lister-item-year text-muted unbold">(2016)</span>
    </h3>
    <p class="text-muted ">
      <span class="certificate">PG-13</span>
      <span class="ghost">|</span>
      <span class="runtime">{runtime} min</span>
      <span class="ghost">|</span>
      <span class="genre">
{genre}            </span>
    </p>
    <div class="ratings-bar">
      <div class="inline-block ratings-imdb-rating" name="ir" data-value="{rating}">
        <strong>{rating}</strong>
      </div>
      {metascore}
    </div>
    <p class="sort-num_votes-visible">
      <span class="text-muted">Votes:</span>
      <span name="nv" data-value="{votes}">{votes:,}</span>
      <span class="ghost">|</span>
      <span class="text-muted">Gross:</span>
      <span name="nv" data-value="1000000">$1.00M</span>
    </p>
  </div>
</div>
"""

METASCORE = """<div class="inline-block ratings-metascore">
        <span class="metascore  favorable">{score}        </span> Metascore
      </div>"""


def movie(i):
    return {
        "title": f"Movie {i + 1}",
        "runtime": 90 + i,
        "genre": GENRES[i % len(GENRES)],
        "rating": round(5.0 + (i % 30) / 10, 1),
        "metascore": None if i in NO_METASCORE else 40 + i,
        "votes": 1000 * (i + 1),
    }


def listing_html(count=30):
    items = []
    for i in range(count):
        m = movie(i)
        score = "" if m["metascore"] is None else METASCORE.format(score=m["metascore"])
        items.append(ITEM.format(rank=i + 1, title=m["title"], runtime=m["runtime"], genre=m["genre"],
                                 rating=m["rating"], metascore=score, votes=m["votes"]))
    return "<html><body><div class=\"lister-list\">" + "".join(items) + "</div></body></html>"
