"""
Craps Quest - Game Engine

Applies purchases, bets, rolls and choices to a GameState. All methods are
stateless class methods: the current state goes in, a new state comes out,
and the input is never modified.

Turn flow:
    MARKETPLACE_REFRESH -> (MARKET_PURCHASE) -> BETTING -> COME_OUT_ROLL
    -> (POINT_PHASE) -> RESOLUTION -> end_turn -> next player's
    MARKETPLACE_REFRESH, or GAME_OVER once a winner is known.
"""

import logging
import random
from dataclasses import replace
from typing import Sequence

from src.engine.base import (
    BetType,
    Card,
    DiceRoll,
    GameState,
    Monster,
    PendingChoice,
    PermanentCard,
    Player,
    SingleUseCard,
    TurnEndReason,
    TurnPhase,
)
from src.engine.betting import (
    BetResolution,
    calculate_shooter_winnings,
    create_bet,
    process_come_out_craps,
    process_come_out_natural,
    process_crap_out,
    process_escape,
    process_monster_defeated,
    process_point_made,
    process_point_phase_hit,
    validate_bet,
)
from src.engine.come_out import Craps, ComeOutResult, Natural, evaluate_come_out_roll
from src.engine.constants import DEFAULT_DICE_COUNT
from src.engine.dice import roll as roll_dice
from src.engine.errors import InvalidActionError, InvalidRoll
from src.engine.game_init import (
    find_player_by_id,
    get_next_player_index,
    reset_turn_state,
)
from src.engine.gold import add_gold, apply_crap_out_penalty, remove_gold
from src.engine.hand import (
    add_permanent_card,
    add_single_use_card,
    can_hold_card,
    discard_hand,
    is_hand_empty,
    use_single_use_card,
)
from src.engine.marketplace import (
    remove_marketplace_card,
    restock_marketplace,
    validate_card_purchase,
    validate_marketplace_refresh,
)
from src.engine.monsters import defeat_monster, hit_monster_number
from src.engine.point_phase import (
    CrapOut,
    EscapeOffered,
    MonsterHit,
    PointHit,
    PointPhaseResult,
    evaluate_point_phase_roll,
)
from src.engine.turn import transition
from src.engine.validators import validate_dice_values
from src.engine.victory import (
    add_victory_points,
    calculate_damage_leader,
    get_player_rankings,
    get_winners,
    resolve_tie_breaker,
)

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Stateless engine for the turn, marketplace and monster rules.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    DICE_COUNT = DEFAULT_DICE_COUNT
    SHOPPING_PHASES = frozenset({TurnPhase.MARKETPLACE_REFRESH, TurnPhase.MARKET_PURCHASE})

    # =========================================================================
    # Guards and helpers
    # =========================================================================

    @classmethod
    def _require_running(cls, state: GameState) -> None:
        if state.is_game_over:
            raise InvalidActionError("The game is over.")

    @classmethod
    def _require_phase(cls, state: GameState, *phases: TurnPhase) -> None:
        cls._require_running(state)
        if state.turn_state.phase not in phases:
            expected = ", ".join(p.name for p in phases)
            raise InvalidActionError(
                f"Not allowed during {state.turn_state.phase.name} (expected {expected})."
            )

    @classmethod
    def _require_active_player(cls, state: GameState, player_id: str) -> None:
        if player_id != state.active_player.id:
            raise InvalidActionError("Only the active player can do that.")

    @classmethod
    def _require_choice(cls, state: GameState, choice: PendingChoice | None) -> None:
        if state.turn_state.pending_choice is not choice:
            pending = state.turn_state.pending_choice
            raise InvalidActionError(
                f"Pending choice is {pending.name if pending else 'nothing'}."
            )

    @classmethod
    def _replace_player(cls, players: Sequence[Player], player: Player) -> tuple[Player, ...]:
        return tuple(player if p.id == player.id else p for p in players)

    @classmethod
    def _replace_current_monster(cls, state: GameState, monster: Monster) -> tuple[Monster, ...]:
        monsters = list(state.monsters)
        monsters[state.current_monster_index] = monster
        return tuple(monsters)

    @classmethod
    def _apply_bet_results(
        cls,
        players: Sequence[Player],
        results: Sequence[BetResolution]
    ) -> tuple[Player, ...]:
        updated = {p.id: p for p in players}
        for result in results:
            if result.gold_change > 0 and result.player_id in updated:
                updated[result.player_id] = add_gold(updated[result.player_id], result.gold_change)
        return tuple(updated[p.id] for p in players)

    @classmethod
    def _roll(cls, roll: DiceRoll | None, rng: random.Random | None) -> DiceRoll:
        if roll is None:
            return roll_dice(cls.DICE_COUNT, rng)
        try:
            validate_dice_values(roll.values, min_count=cls.DICE_COUNT, max_count=cls.DICE_COUNT)
        except ValueError as exc:
            raise InvalidRoll(str(exc)) from exc
        return roll

    @classmethod
    def _end_turn_phase(cls, state: GameState, reason: TurnEndReason) -> GameState:
        turn_state = transition(state.turn_state, TurnPhase.RESOLUTION)
        return replace(state, turn_state=replace(turn_state, end_reason=reason, pending_choice=None))

    @classmethod
    def _grant_card(cls, player: Player, card: Card) -> Player:
        """Hand cards go to the hand; point cards are cashed in."""
        if isinstance(card, PermanentCard):
            return add_permanent_card(player, card)
        if isinstance(card, SingleUseCard):
            return add_single_use_card(player, card)
        return add_victory_points(player, card.points)

    @classmethod
    def _draw_reward_card(cls, state: GameState) -> GameState:
        """The shooter takes the top card of the deck; unholdable cards go to the bottom."""
        if not state.card_deck:
            return state
        card, rest = state.card_deck[0], state.card_deck[1:]
        shooter = state.active_player
        if not can_hold_card(shooter, card):
            logger.debug("%s cannot hold %s; card returned to the deck", shooter.name, card.name)
            return replace(state, card_deck=rest + (card,))
        shooter = cls._grant_card(shooter, card)
        logger.debug("%s draws %s", shooter.name, card.name)
        return replace(
            state,
            players=cls._replace_player(state.players, shooter),
            card_deck=rest,
        )

    @classmethod
    def _defeat_current_monster(cls, state: GameState, by_natural: bool = False) -> GameState:
        monster = defeat_monster(state.current_monster)
        shooter = state.active_player
        shooter = add_victory_points(shooter, monster.points)
        shooter = add_gold(shooter, monster.gold_reward)

        if by_natural:
            results = process_come_out_natural(state.bets)
        else:
            results = process_monster_defeated(state.bets, state.turn_state.turn_damage)
            shooter = add_gold(shooter, calculate_shooter_winnings(state.bets))

        players = cls._apply_bet_results(cls._replace_player(state.players, shooter), results)
        state = replace(
            state,
            players=players,
            monsters=cls._replace_current_monster(state, monster),
            bets=(),
        )
        logger.info(
            "%s defeated %s (+%d VP, +%d gold)",
            shooter.name, monster.name, monster.points, monster.gold_reward,
        )
        state = cls._draw_reward_card(state)
        return cls._end_turn_phase(state, TurnEndReason.DEFEATED)

    @classmethod
    def _hit_current_monster(cls, state: GameState, number: int) -> GameState:
        monster = hit_monster_number(state.current_monster, number)
        players = cls._apply_bet_results(state.players, process_point_phase_hit(state.bets))
        return replace(
            state,
            players=players,
            monsters=cls._replace_current_monster(state, monster),
            turn_state=replace(state.turn_state, turn_damage=state.turn_state.turn_damage + 1),
        )

    @classmethod
    def _finish(cls, state: GameState, winner_id: str | None) -> GameState:
        turn_state = transition(state.turn_state, TurnPhase.GAME_OVER)
        logger.info("Game over, winner: %s", winner_id)
        return replace(
            state,
            turn_state=replace(turn_state, pending_choice=None),
            is_game_over=True,
            winner_id=winner_id,
        )

    # =========================================================================
    # Turn lifecycle
    # =========================================================================

    @classmethod
    def set_phase(cls, state: GameState, phase: TurnPhase) -> GameState:
        """
        Move the turn to another phase along the transition table.

        Raises:
            InvalidPhaseTransition: If the move is not allowed
            InvalidActionError: For GAME_OVER (use end_game) or an ended game
        """
        cls._require_running(state)
        if phase is TurnPhase.GAME_OVER:
            raise InvalidActionError("Use end_game to finish the game.")
        return replace(state, turn_state=transition(state.turn_state, phase))

    @classmethod
    def start_turn(cls, state: GameState) -> GameState:
        """Remember the current monster so a crap-out can roll it back."""
        cls._require_phase(state, TurnPhase.MARKETPLACE_REFRESH)
        logger.info("%s's turn begins", state.active_player.name)
        return replace(
            state,
            turn_state=replace(state.turn_state, monster_state_before_turn=state.current_monster),
        )

    @classmethod
    def end_turn(cls, state: GameState) -> GameState:
        """
        Close a resolved turn.

        Banks turn damage, updates the damage leader, checks for a winner,
        advances past a defeated monster and hands the dice to the next player.
        """
        cls._require_phase(state, TurnPhase.RESOLUTION)
        turn_state = state.turn_state
        shooter = state.active_player
        shooter = replace(shooter, damage_count=shooter.damage_count + turn_state.turn_damage)
        players = cls._replace_player(state.players, shooter)
        leader_id = calculate_damage_leader(players)
        state = replace(state, players=players, damage_leader_id=leader_id, bets=())
        logger.info("%s's turn ends (%s)", shooter.name, turn_state.end_reason)

        winners = get_winners(players, leader_id)
        if winners:
            winner = resolve_tie_breaker(winners, leader_id) or winners[0]
            return cls._finish(state, winner.id)

        monster_index = state.current_monster_index
        if turn_state.end_reason is TurnEndReason.DEFEATED:
            if monster_index == len(state.monsters) - 1:
                ranked = get_player_rankings(players, leader_id)
                winner = resolve_tie_breaker(ranked, leader_id) or ranked[0]
                return cls._finish(state, winner.id)
            monster_index += 1

        next_index = get_next_player_index(state.current_player_index, len(players))
        state = replace(
            state,
            current_player_index=next_index,
            current_monster_index=monster_index,
            turn_state=reset_turn_state(players[next_index].id),
        )
        return cls.start_turn(state)

    @classmethod
    def end_game(cls, state: GameState, winner_id: str | None) -> GameState:
        """
        Finish the game immediately.

        Raises:
            InvalidActionError: If the winner is not a player in this game
        """
        cls._require_running(state)
        if winner_id is not None and find_player_by_id(state.players, winner_id) is None:
            raise InvalidActionError(f"Unknown player {winner_id}.")
        return cls._finish(state, winner_id)

    # =========================================================================
    # Marketplace
    # =========================================================================

    @classmethod
    def purchase_card(cls, state: GameState, player_id: str, card_id: str) -> GameState:
        """
        Buy a card from the marketplace.

        Permanent and single-use cards go to the player's hand; point cards
        are cashed in for victory points. The slot is left empty.

        Raises:
            InvalidActionError: If the purchase is not allowed
        """
        cls._require_phase(state, *cls.SHOPPING_PHASES)
        cls._require_active_player(state, player_id)

        player = state.active_player
        card = validate_card_purchase(player, state.marketplace, card_id)
        player = cls._grant_card(remove_gold(player, card.cost), card)

        turn_state = state.turn_state
        if turn_state.phase is TurnPhase.MARKETPLACE_REFRESH:
            turn_state = transition(turn_state, TurnPhase.MARKET_PURCHASE)

        logger.debug("%s bought %s for %d gold", player.name, card.name, card.cost)
        return replace(
            state,
            players=cls._replace_player(state.players, player),
            marketplace=remove_marketplace_card(state.marketplace, card_id),
            turn_state=turn_state,
        )

    @classmethod
    def refresh_marketplace(cls, state: GameState, player_id: str) -> GameState:
        """
        Pay to replace the marketplace offer.

        Raises:
            InvalidActionError: Outside MARKETPLACE_REFRESH, for another
                player, or without enough gold
        """
        cls._require_phase(state, TurnPhase.MARKETPLACE_REFRESH)
        cls._require_active_player(state, player_id)

        player = state.active_player
        cost = validate_marketplace_refresh(player)
        player = remove_gold(player, cost)
        marketplace, deck = restock_marketplace(state.marketplace, state.card_deck)

        logger.debug("%s refreshed the marketplace", player.name)
        return replace(
            state,
            players=cls._replace_player(state.players, player),
            marketplace=marketplace,
            card_deck=deck,
        )

    @classmethod
    def use_single_use_card(
        cls,
        state: GameState,
        player_id: str,
        card_id: str
    ) -> tuple[GameState, SingleUseCard]:
        """
        Consume a single-use card. Applying its effect is up to the caller.

        Returns:
            Tuple of (new state, consumed card)
        """
        cls._require_running(state)
        player = find_player_by_id(state.players, player_id)
        if player is None:
            raise InvalidActionError(f"Unknown player {player_id}.")
        player, card = use_single_use_card(player, card_id)
        logger.debug("%s used %s", player.name, card.name)
        return replace(state, players=cls._replace_player(state.players, player)), card

    # =========================================================================
    # Betting
    # =========================================================================

    @classmethod
    def place_bet(
        cls,
        state: GameState,
        player_id: str,
        bet_type: BetType,
        amount: int
    ) -> GameState:
        """
        Place a side bet on the shooter. The stake is taken immediately.

        Raises:
            InvalidActionError: If the bet is not allowed
        """
        cls._require_phase(state, TurnPhase.BETTING)
        bettor = find_player_by_id(state.players, player_id)
        if bettor is None:
            raise InvalidActionError(f"Unknown player {player_id}.")

        validate_bet(bettor, bet_type, amount, state.active_player.id, state.bets)
        bettor = remove_gold(bettor, amount)
        logger.debug("%s bets %d %s", bettor.name, amount, bet_type.name)
        return replace(
            state,
            players=cls._replace_player(state.players, bettor),
            bets=state.bets + (create_bet(player_id, bet_type, amount),),
        )

    # =========================================================================
    # Rolling
    # =========================================================================

    @classmethod
    def resolve_come_out_roll(
        cls,
        state: GameState,
        roll: DiceRoll | None = None,
        rng: random.Random | None = None,
    ) -> tuple[GameState, ComeOutResult]:
        """
        Roll (or take `roll`) and resolve the come-out.

        Returns:
            Tuple of (new state, come-out result)
        """
        cls._require_phase(state, TurnPhase.COME_OUT_ROLL)
        dice = cls._roll(roll, rng)
        result = evaluate_come_out_roll(dice.total)
        logger.debug("%s come-out roll %s = %d", state.active_player.name, dice.values, dice.total)

        turn_state = replace(state.turn_state, roll_count=state.turn_state.roll_count + 1)
        if turn_state.monster_state_before_turn is None:
            turn_state = replace(turn_state, monster_state_before_turn=state.current_monster)
        state = replace(state, turn_state=turn_state)

        if isinstance(result, Natural):
            return cls._defeat_current_monster(state, by_natural=True), result

        if isinstance(result, Craps):
            shooter, lost = apply_crap_out_penalty(state.active_player)
            players = cls._apply_bet_results(
                cls._replace_player(state.players, shooter),
                process_come_out_craps(state.bets),
            )
            logger.info("%s rolled craps and lost %d gold", shooter.name, lost)
            state = replace(state, players=players, bets=())
            return cls._end_turn_phase(state, TurnEndReason.CRAPS), result

        turn_state = transition(state.turn_state, TurnPhase.POINT_PHASE)
        return replace(state, turn_state=replace(turn_state, point=result.point_value)), result

    @classmethod
    def resolve_point_phase_roll(
        cls,
        state: GameState,
        roll: DiceRoll | None = None,
        rng: random.Random | None = None,
    ) -> tuple[GameState, PointPhaseResult]:
        """
        Roll (or take `roll`) against the point and the current monster.

        A point hit or snake eyes leaves a pending choice that must be
        resolved before the next roll; so does a crap-out while the revive
        is unused.

        Returns:
            Tuple of (new state, point-phase result)
        """
        cls._require_phase(state, TurnPhase.POINT_PHASE)
        cls._require_choice(state, None)
        if state.turn_state.point is None:
            raise InvalidActionError("No point has been established.")

        dice = cls._roll(roll, rng)
        result = evaluate_point_phase_roll(
            dice.total, state.turn_state.point, state.current_monster.remaining_numbers
        )
        logger.debug(
            "%s point-phase roll %s = %d -> %s",
            state.active_player.name, dice.values, dice.total, result.kind.value,
        )
        state = replace(
            state,
            turn_state=replace(state.turn_state, roll_count=state.turn_state.roll_count + 1),
        )

        if isinstance(result, MonsterHit):
            state = cls._hit_current_monster(state, result.hit_number)
            if state.current_monster.is_defeated:
                state = cls._defeat_current_monster(state)
            return state, result

        if isinstance(result, PointHit):
            pending = PendingChoice.SELECT_NUMBER
        elif isinstance(result, EscapeOffered):
            pending = PendingChoice.ESCAPE
        elif isinstance(result, CrapOut):
            return cls._crap_out(state), result
        else:
            return state, result

        return replace(state, turn_state=replace(state.turn_state, pending_choice=pending)), result

    @classmethod
    def _crap_out(cls, state: GameState) -> GameState:
        shooter, lost = apply_crap_out_penalty(state.active_player)
        players = cls._apply_bet_results(
            cls._replace_player(state.players, shooter),
            process_crap_out(state.bets),
        )
        turn_state = state.turn_state
        monsters = state.monsters
        if turn_state.monster_state_before_turn is not None:
            monsters = cls._replace_current_monster(state, turn_state.monster_state_before_turn)

        logger.info("%s crapped out and lost %d gold", shooter.name, lost)
        state = replace(
            state,
            players=players,
            monsters=monsters,
            bets=(),
            turn_state=replace(turn_state, turn_damage=0),
        )
        # reviving costs the whole hand, so an empty hand cannot revive
        if not turn_state.has_used_revive and not is_hand_empty(shooter):
            return replace(
                state,
                turn_state=replace(state.turn_state, pending_choice=PendingChoice.REVIVE),
            )
        return cls._end_turn_phase(state, TurnEndReason.CRAPPED_OUT)

    # =========================================================================
    # Choices
    # =========================================================================

    @classmethod
    def select_hit_number(cls, state: GameState, number: int) -> GameState:
        """
        Cross off the number chosen after a point hit. The turn then ends.

        Raises:
            InvalidActionError: Without a pending point hit, or for a number
                that is not on the monster
        """
        cls._require_phase(state, TurnPhase.POINT_PHASE)
        cls._require_choice(state, PendingChoice.SELECT_NUMBER)
        if number not in state.current_monster.remaining_numbers:
            raise InvalidActionError(f"{number} is not a remaining number on the monster.")

        state = cls._hit_current_monster(state, number)
        state = replace(state, turn_state=replace(state.turn_state, pending_choice=None))
        if state.current_monster.is_defeated:
            return cls._defeat_current_monster(state)

        players = cls._apply_bet_results(state.players, process_point_made(state.bets))
        state = replace(state, players=players, bets=())
        return cls._end_turn_phase(state, TurnEndReason.POINT_MADE)

    @classmethod
    def choose_escape(cls, state: GameState, accept: bool) -> GameState:
        """Take the snake-eyes escape (turn ends, bets returned, turn damage lost) or keep rolling."""
        cls._require_phase(state, TurnPhase.POINT_PHASE)
        cls._require_choice(state, PendingChoice.ESCAPE)
        if not accept:
            return replace(state, turn_state=replace(state.turn_state, pending_choice=None))

        players = cls._apply_bet_results(state.players, process_escape(state.bets))
        logger.info("%s escaped from %s", state.active_player.name, state.current_monster.name)
        # escaping forfeits this turn's damage; crossed-off numbers stay crossed off
        state = replace(
            state,
            players=players,
            bets=(),
            turn_state=replace(state.turn_state, turn_damage=0),
        )
        return cls._end_turn_phase(state, TurnEndReason.ESCAPED)

    @classmethod
    def choose_revive(cls, state: GameState, accept: bool) -> GameState:
        """
        After a crap-out, discard the whole hand to keep rolling, or accept
        the end of the turn. Discarded cards go to the bottom of the deck.
        """
        cls._require_phase(state, TurnPhase.POINT_PHASE)
        cls._require_choice(state, PendingChoice.REVIVE)
        if not accept:
            return cls._end_turn_phase(state, TurnEndReason.CRAPPED_OUT)

        if is_hand_empty(state.active_player):
            raise InvalidActionError("Cannot revive with an empty hand.")

        shooter, discarded = discard_hand(state.active_player)
        logger.info("%s revived, discarding %d cards", shooter.name, len(discarded))
        return replace(
            state,
            players=cls._replace_player(state.players, shooter),
            card_deck=state.card_deck + discarded,
            turn_state=replace(state.turn_state, pending_choice=None, has_used_revive=True),
        )
