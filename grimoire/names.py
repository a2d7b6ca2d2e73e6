"""Random name generation for services and runs."""

import random

from grimoire.uid import NUMERIC, new_uid_src

NAMES = [
    "Raven", "Draven", "Lilith", "Morana", "Nocturne", "Azrael", "Shadow",
    "Malice", "Sable", "Onyx", "Mordred", "Nyx", "Thorn", "Isolde", "Hades",
    "Erebus", "Seraphine", "Obsidian", "Elvira", "Vesper", "Morrigan", "Cain",
    "Dusk", "Lycan", "Bane", "Damien", "Blaze", "Acheron", "Ravana",
    "Midnight", "Belladonna", "Thanatos", "Vortex", "Necro", "Zephyr",
    "Gloom", "Orion", "Abyss", "Phantom", "Mysteria", "Vulcan", "Styx",
    "Calypso", "Eclipse", "Kraven", "Samael", "Inferno", "Tempest",
    "Pandora", "Deimos", "Stygian", "Vandal", "Nerezza", "Omen", "Icarus",
    "Ravenor", "Grimm", "Corvus", "Malefic", "Venom", "Specter", "Umbra",
    "Diablo", "Slade", "Sephiroth", "Crow", "Morgue", "Scythe", "Wraith",
    "Astaroth", "Grimoire", "Frost", "Cipher", "Shadowend", "Nightshade",
    "Rune", "Zephyr", "Strife", "Crypt", "Asmodeus", "Viper", "Draconis",
    "Zagan", "Mortis", "Void", "Rancor", "Lazarus", "Nihil", "Fang",
    "Gargoyle", "Arachne", "Dread", "Plague", "Shard", "Nemesis",
    "Maelstrom", "Solstice", "Nox", "Ravage", "Leviathan",
]

ADJ = [
    "Abstruse", "Acerbic", "Acrimonious", "Aesthete", "Alacrity",
    "Ambivalent", "Amorphous", "Anachronistic", "Arcane", "Ascetic",
    "Assiduous", "Atavistic", "Audacious", "Auspicious", "Banal",
    "Belligerent", "Blithe", "Bombastic", "Bucolic", "Cacophony",
    "Capricious", "Cerebral", "Chimerical", "Circumspect", "Clairvoyant",
    "Cogent", "Concomitant", "Confluence", "Conundrum", "Copacetic",
    "Cryptic", "Culpable", "Decorous", "Demure", "Desultory", "Diaphanous",
    "Dichotomy", "Didactic", "Diffident", "Dilatory", "Disparate", "Droll",
    "Ebullient", "Effervescent", "Egregious", "Elicit", "Enigmatic", "Ennui",
    "Epitome", "Equanimity", "Esoteric", "Ethereal", "Exacerbate",
    "Exculpate", "Exigent", "Expunge", "Extant", "Facetious", "Fecund",
    "Feckless", "Feral", "Flippant", "Florid", "Garrulous", "Gregarious",
    "Harbinger", "Iconoclast", "Idiosyncratic", "Ignominious", "Imbroglio",
    "Impecunious", "Impetuous", "Implacable", "Inchoate", "Incisive",
    "Ineffable", "Inexorable", "Ingenuous", "Inimical", "Insidious",
    "Insouciant", "Intransigent", "Intrepid", "Inundate", "Invective",
    "Irascible", "Itinerant", "Jejune", "Juxtapose", "Languid", "Lascivious",
    "Loquacious", "Lugubrious", "Machination", "Magnanimous", "Malevolent",
    "Mendacious", "Mercurial", "Mollify", "Nebulous",
]

_SUFFIX_LEN = 4


def _suffix() -> str:
    return random.choice(ADJ) + "_" + new_uid_src(_SUFFIX_LEN, NUMERIC)


def new_name() -> str:
    """Return a name of the form ``Name_Adjective_NNNN``."""
    return random.choice(NAMES) + "_" + _suffix()


def new_last_name(name: str) -> str:
    """Return ``name`` followed by a random adjective and four digits."""
    return name + "_" + _suffix()