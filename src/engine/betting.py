"""
Craps Quest - Side Betting

Other players may bet FOR or AGAINST the shooter before the come-out roll.
Bet gold is taken when the bet is placed; a resolution's gold_change is
what the bettor receives back (0 means the bet is lost).

Payouts:
    - Come-out natural: every bet returned
    - Come-out craps / point-phase crap-out: FOR lost, AGAINST doubled
    - Point-phase hit: +1 gold to every FOR bettor
    - Monster defeated: FOR returned, AGAINST lost to the shooter
    - Escape: every bet returned
    - Point made without a defeat: every bet returned
"""

from dataclasses import dataclass
from typing import Sequence

from src.engine.base import Bet, BetType, Player
from src.engine.constants import MAX_BET_AMOUNT
from src.engine.errors import InvalidActionError
from src.engine.gold import can_afford


@dataclass(frozen=True)
class BetResolution:
    """
    Outcome of one bet.

    Attributes:
        player_id: The bettor
        bet: The original bet
        gold_change: Gold paid out to the bettor
        reason: Human-readable explanation
    """
    player_id: str
    bet: Bet
    gold_change: int
    reason: str


@dataclass(frozen=True)
class BetSummary:
    total_for: int
    total_against: int
    for_bets: tuple[Bet, ...]
    against_bets: tuple[Bet, ...]

    @property
    def total_bettors(self) -> int:
        return len(self.for_bets) + len(self.against_bets)


def validate_bet(
    player: Player,
    bet_type: BetType,
    amount: int,
    active_player_id: str,
    existing_bets: Sequence[Bet]
) -> int:
    """
    Validate a bet before it is placed.

    Returns:
        Validated amount

    Raises:
        InvalidActionError: If the bet is not allowed
    """
    if player.id == active_player_id:
        raise InvalidActionError("You cannot bet on your own turn.")

    if not isinstance(bet_type, BetType):
        raise InvalidActionError(f"Unknown bet type {bet_type!r}.")

    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidActionError("Bet amount must be a whole number.")

    if amount <= 0:
        raise InvalidActionError("Bet amount must be greater than 0.")

    if amount > MAX_BET_AMOUNT:
        raise InvalidActionError(f"Maximum bet is {MAX_BET_AMOUNT} gold.")

    if not can_afford(player, amount):
        raise InvalidActionError(
            f"Not enough gold. You have {player.gold}, trying to bet {amount}."
        )

    if has_player_bet(existing_bets, player.id):
        raise InvalidActionError("You have already placed a bet this turn.")

    return amount


def create_bet(player_id: str, bet_type: BetType, amount: int) -> Bet:
    return Bet(player_id=player_id, bet_type=bet_type, amount=amount)


def get_bets_by_type(bets: Sequence[Bet], bet_type: BetType) -> tuple[Bet, ...]:
    return tuple(b for b in bets if b.bet_type is bet_type)


def get_player_bet(bets: Sequence[Bet], player_id: str) -> Bet | None:
    return next((b for b in bets if b.player_id == player_id), None)


def has_player_bet(bets: Sequence[Bet], player_id: str) -> bool:
    return get_player_bet(bets, player_id) is not None


def get_bet_summary(bets: Sequence[Bet]) -> BetSummary:
    for_bets = get_bets_by_type(bets, BetType.FOR)
    against_bets = get_bets_by_type(bets, BetType.AGAINST)
    return BetSummary(
        total_for=sum(b.amount for b in for_bets),
        total_against=sum(b.amount for b in against_bets),
        for_bets=for_bets,
        against_bets=against_bets,
    )


def _return_all(bets: Sequence[Bet], reason: str) -> list[BetResolution]:
    return [BetResolution(b.player_id, b, b.amount, reason) for b in bets]


def _shooter_lost(bets: Sequence[Bet], event: str) -> list[BetResolution]:
    results = []
    for bet in bets:
        if bet.bet_type is BetType.FOR:
            results.append(BetResolution(bet.player_id, bet, 0, f"{event} - FOR bet lost"))
        else:
            results.append(BetResolution(bet.player_id, bet, bet.amount * 2, f"{event} - AGAINST bet doubled"))
    return results


def process_come_out_natural(bets: Sequence[Bet]) -> list[BetResolution]:
    return _return_all(bets, "Natural rolled - bet returned")


def process_come_out_craps(bets: Sequence[Bet]) -> list[BetResolution]:
    return _shooter_lost(bets, "Craps rolled")


def process_point_phase_hit(bets: Sequence[Bet]) -> list[BetResolution]:
    """FOR bettors earn +1 gold per hit; bets stay open."""
    return [
        BetResolution(b.player_id, b, 1, "Monster hit - FOR bettor gains +1")
        for b in get_bets_by_type(bets, BetType.FOR)
    ]


def process_monster_defeated(bets: Sequence[Bet], hits_count: int) -> list[BetResolution]:
    results = []
    for bet in bets:
        if bet.bet_type is BetType.FOR:
            results.append(BetResolution(
                bet.player_id, bet, bet.amount,
                f"Monster defeated - FOR bet returned (already earned {hits_count} from hits)",
            ))
        else:
            results.append(BetResolution(
                bet.player_id, bet, 0, "Monster defeated - AGAINST bet lost to shooter",
            ))
    return results


def calculate_shooter_winnings(bets: Sequence[Bet]) -> int:
    """AGAINST pool collected by the shooter on a defeat."""
    return sum(b.amount for b in get_bets_by_type(bets, BetType.AGAINST))


def process_crap_out(bets: Sequence[Bet]) -> list[BetResolution]:
    return _shooter_lost(bets, "Shooter crapped out")


def process_escape(bets: Sequence[Bet]) -> list[BetResolution]:
    return _return_all(bets, "Shooter escaped - bet returned")


def process_point_made(bets: Sequence[Bet]) -> list[BetResolution]:
    """Turn ends on a point hit without a defeat: bets are a push."""
    return _return_all(bets, "Point made - bet returned")


def format_bet(bet: Bet, player_name: str) -> str:
    return f"{player_name} bets {bet.amount}g {bet.bet_type.name}"
