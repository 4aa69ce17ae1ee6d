# src/textubes/plugins/kinds/wordlists.py
"""Bundled word lists for the random generators."""

NOUNS: tuple[str, ...] = (
    "apple", "anchor", "anvil", "badger", "balloon", "banana", "barn", "basket", "beacon", "beetle",
    "bicycle", "biscuit", "blanket", "bottle", "bridge", "bucket", "butter", "cabbage", "cactus", "camera",
    "candle", "canyon", "carpet", "castle", "cathedral", "cello", "chimney", "cloud", "comet", "compass",
    "cookie", "crayon", "crocodile", "crown", "cushion", "daisy", "desert", "diamond", "dolphin", "donkey",
    "dragon", "drum", "eagle", "elbow", "engine", "envelope", "falcon", "feather", "ferret", "fiddle",
    "fountain", "fox", "galaxy", "garden", "giraffe", "glacier", "goblet", "goose", "guitar", "hammer",
    "harbor", "harp", "hedgehog", "helmet", "honey", "island", "jacket", "jelly", "kettle", "kite",
    "ladder", "lantern", "lemon", "library", "lighthouse", "lobster", "magnet", "mango", "meadow", "mirror",
    "mitten", "monkey", "moon", "mountain", "mushroom", "napkin", "needle", "noodle", "ocean", "octopus",
    "orchard", "otter", "owl", "paddle", "pancake", "parrot", "pebble", "pencil", "penguin", "pickle",
    "pillow", "pineapple", "planet", "pocket", "potato", "pumpkin", "puzzle", "quilt", "rabbit", "radish",
    "raincoat", "river", "robot", "rocket", "saddle", "sandwich", "scarf", "seashell", "shovel", "skeleton",
    "sock", "spoon", "squirrel", "staircase", "star", "submarine", "sunflower", "sweater", "teapot", "telescope",
    "thimble", "tiger", "toaster", "tornado", "trombone", "trumpet", "tulip", "turtle", "umbrella", "unicorn",
    "vase", "violin", "volcano", "waffle", "walrus", "wagon", "whistle", "window", "wizard", "zebra",
)  # fmt: skip
