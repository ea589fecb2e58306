"""
Sticker pipeline package for building LINE sticker packs.

Modules:
- assets: image discovery, ordering and sticker file naming
- render: contain/cover fitting, gravity anchoring and compositing
- core: batch combine and resize orchestration
- renamer: renumbering outputs to 01.png ... 40.png
- selector: interactive choice prompt
- thumbnails: main.png / tab.png derivation
"""
