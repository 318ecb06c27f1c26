from __future__ import annotations

from transit.core.commands import Command, CommandCategory as Cat
from transit.core.handlers.crew import handle_alignment, handle_choose, handle_profile, handle_talk
from transit.core.handlers.dilatation import handle_time
from transit.core.handlers.help import handle_help
from transit.core.handlers.navigation import handle_inspect, handle_look, handle_move
from transit.core.handlers.resources import handle_inventory, handle_mine
from transit.core.handlers.ship import handle_check, handle_repair, handle_status

# Order matters: "examine" is claimed by both look and inspect, and inspect is
# registered later, so "examine <target>" reaches inspect.
DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command("status", handle_status, ("stat", "systems"), "Show full ship status", "status", Cat.SYSTEM),
    Command("check", handle_check, (), "Check one ship system", "check <system>", Cat.SYSTEM),
    Command("repair", handle_repair, ("fix",), "Repair a ship system (10 subjective time)", "repair <system>", Cat.SHIP),
    Command("time", handle_time, ("speed",), "Adjust the time scale", "time <slow|normal|fast>", Cat.TIME),
    Command("move", handle_move, ("go", "travel", "walk"), "Move to an adjacent location", "move <location>", Cat.NAVIGATION),
    Command("look", handle_look, ("l", "examine"), "Describe your surroundings", "look", Cat.NAVIGATION),
    Command(
        "inspect",
        handle_inspect,
        ("study", "investigate", "examine"),
        "Closely examine something nearby",
        "inspect <target>",
        Cat.NAVIGATION,
    ),
    Command("mine", handle_mine, ("dig", "extract"), "Salvage scrap from the void (20 subjective time)", "mine", Cat.INVENTORY),
    Command("inventory", handle_inventory, ("inv", "i", "items"), "List carried items", "inventory", Cat.INVENTORY),
    Command("talk", handle_talk, ("speak",), "Talk to someone nearby", "talk <name>", Cat.CREW),
    Command(
        "choose",
        handle_choose,
        ("pick", "decide"),
        "Resolve a pending decision",
        "choose <a|b>",
        Cat.CREW,
        resolves_choice=True,
    ),
    Command("alignment", handle_alignment, ("align",), "Show your moral compass", "alignment", Cat.CREW),
    Command("profile", handle_profile, ("whoami", "pioneer"), "Show your Pioneer manifest", "profile", Cat.CREW),
    Command("help", handle_help, ("commands", "?"), "Show this help text", "help [command]", Cat.UTILITY),
)
