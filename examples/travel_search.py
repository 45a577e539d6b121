# travel_search.py
#
# Demonstration of combining predicates to search a text column, with and
# without an index, and extracting the matching rows into a new Table.
#
import random
import time

import statictable as st

COUNTRY_CODES = "US UK FR DE IT ES PE CL RU CN JP IL IN BR MX CA AU NZ".split()


def main():
    rng = random.Random(0)

    data = []
    for i in range(1, 50_001):
        data.append(f"traveler{i:05d}")
        data.append(" ".join(sorted(rng.sample(COUNTRY_CODES, rng.randint(1, 4)))))
    travelers = st.Table(["Traveler", "Countries"], data)
    print(travelers.info())

    us_and_ru = st.Predicate.all_of(st.Predicate.contains("US"), st.Predicate.contains("RU"))

    q = st.Query(travelers)
    start = time.perf_counter()
    found = q.grep(us_and_ru, "Countries", mode=st.GrepMode.ROW_NUMBERS)
    print(f"scan:    {len(found)} rows in {time.perf_counter() - start:.3f} sec")

    print("selectivity", q.add_index("Countries"))
    start = time.perf_counter()
    found_indexed = q.grep(us_and_ru, "Countries", mode=st.GrepMode.ROW_NUMBERS)
    print(f"indexed: {len(found_indexed)} rows in {time.perf_counter() - start:.3f} sec")
    assert found == found_indexed

    # pull out the matching rows, and search them again
    us_and_ru_travelers = travelers.take(found)
    sub_query = st.Query(us_and_ru_travelers)
    also_cn = sub_query.grep(st.Predicate.contains("CN"), "Countries", mode=st.GrepMode.ROW_NUMBERS)
    us_and_ru_travelers.take(also_cn).head(20).present(title="Visited US, RU, and CN")


if __name__ == "__main__":
    main()
