# ragged_rows.py
#
# Demonstration of loading irregular rows, and capturing the values that did
# not fit into the table.
#
import statictable as st

raw_rows = [
    ["name", "color", "shape"],
    ["Eggplant", "aubergine", "oblong"],
    ["Egg", "white", "oval", "breakfast", "protein"],
    ["Banana", "yellow"],
    "Kiwi",
]

rejected = {}
produce = st.Table.from_rowset(raw_rows, data_has_header=True, rejected=rejected, filler="")
print(produce)
print()
for row_index, extra_values in rejected.items():
    print(f"input row {row_index} had extra values: {extra_values}")
print()

# same rows without a header - columns are named like a spreadsheet
print(st.Table.from_rowset(raw_rows[1:]).header)
print()

# rows as dicts, including one that isn't
skipped = []
produce = st.Table.from_rowset(
    [
        {"name": "Eggplant", "color": "aubergine"},
        {"name": "Egg", "color": ["white", "beige"]},
        ["Banana", "yellow"],
        {"name": "Kiwi", "color": "brown", "origin": "NZ"},
    ],
    set_of_maps=True,
    rejected=skipped,
)
produce.present()
print("skipped:", skipped)
