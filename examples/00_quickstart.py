from chansearch import ChanSearchClient, SearchFilters

catalog = [
    {
        "page": 1,
        "threads": [
            {"no": 101, "sub": "Wallpaper thread", "com": "post your best", "tim": 1700000000001, "ext": ".png", "replies": 40, "images": 30},
            {"no": 102, "sub": "Wallpaper requests", "com": "text only", "replies": 3, "images": 0},
        ],
    }
]

client = ChanSearchClient()
threads = client.parse_catalog("4chan", catalog, board="wg")

filters = SearchFilters(requires_images=True, min_replies=10, file_types=[".PNG", "jpeg"])
results = client.search({"wg": threads}, "wallpaper", board_abv="wg", filters=filters)

client.save_metadata(results, "out/threads.jsonl")
print("Matched threads:", len(results))
print("First thread:", results[0])
