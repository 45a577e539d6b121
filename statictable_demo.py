#
# statictable_demo.py
#
# Copyright 2026, The statictable authors
#
from statictable import Table, Query, Predicate, GrepMode

# flat data with a header - the last row is padded out with None
scores = Table(["player", "round1", "round2"], ["Alice", 71, 68, "Bob", 74, 70, "Carol", 69])
print(scores)
print()
print(scores[3])
print(scores.column("round1"))
print()

# same table, built from a list of rows with a header row
rows = [
    ["player", "round1", "round2"],
    ["Alice", 71, 68],
    ["Bob", 74, 70],
    ["Carol", 69],
]
print(Table.from_rowset(rows, data_has_header=True) == scores)
print()

# dicts with differing keys - most commonly used keys become the first columns
catalog = Table.from_rowset(
    [
        {"sku": "ANVIL-001", "descr": "1000lb anvil", "unitprice": 100},
        {"sku": "BRDSD-001", "descr": "Bird seed", "unitprice": 3, "unitofmeas": "LB"},
        {"sku": "MAGNT-001", "descr": "Magnet", "unitprice": 8},
        {"sku": "ROBOT-001", "descr": "Domestic robot", "unitprice": 5000},
        {"sku": "BBS-001", "descr": "Steel BB's", "unitprice": 5, "unitofmeas": "LB"},
    ],
    set_of_maps=True,
)
catalog.present()

q = Query(catalog)
print("sku selectivity", q.add_index("sku"))
print("unitofmeas selectivity", q.add_index("unitofmeas"))

# print all items that cost more than 10
for item in q.grep(Predicate.gt(10), "unitprice"):
    print(item["sku"], item["descr"], item["unitprice"])
print()

# items sold by the pound, as a new Table
by_the_pound = catalog.take(q.grep(Predicate.eq("LB"), "unitofmeas", mode=GrepMode.ROW_NUMBERS))
print(by_the_pound.as_markdown())
print(repr(by_the_pound))
