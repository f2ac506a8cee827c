# web_app.py
import logging

from flask import Flask, jsonify, request

from errors import InvalidArgument, InvalidState, NotFound
from habit import Habit

logger = logging.getLogger(__name__)


# ---------------- Helpers ---------------- #
def habit_to_json(habit: Habit, now):
    data = habit.to_dict()
    data["status"] = habit.status(now).value
    data["weekCompletions"] = [d.isoformat() for d in habit.week_completions(now)]
    try:
        data["progress"] = habit.progress_percentage(now)
    except InvalidState:
        data["progress"] = None
    return data


def _error(message, status):
    return jsonify({"success": False, "error": message}), status


# ---------------- Flask App ---------------- #
def create_app(tracker):
    app = Flask(__name__)
    app.config["TRACKER"] = tracker

    @app.errorhandler(InvalidArgument)
    def handle_invalid_argument(e):
        return _error(str(e), 400)

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        return _error(str(e), 404)

    @app.errorhandler(InvalidState)
    def handle_invalid_state(e):
        return _error(str(e), 409)

    @app.route("/api/habits", methods=["GET"])
    def list_habits():
        which = request.args.get("filter", "all").lower()
        now = tracker.clock()
        habits = tracker.collection.filter(which, now)
        return jsonify([habit_to_json(h, now) for h in habits])

    @app.route("/api/habits", methods=["POST"])
    def add_habit():
        data = request.get_json(silent=True) or {}
        name = data.get("name") or ""
        target = data.get("targetFrequency")
        if not isinstance(target, int) or isinstance(target, bool):
            return _error("targetFrequency must be a whole number", 400)

        habit = tracker.add_habit(name, target)
        return jsonify({"success": True, "habit": habit_to_json(habit, tracker.clock())}), 201

    @app.route("/api/habits/<int:habit_id>/complete", methods=["POST"])
    def complete_habit(habit_id):
        with tracker.lock:
            completed = tracker.complete_habit(habit_id)
            habit = tracker.collection.get(habit_id)
        return jsonify({
            "success": True,
            "completed": completed,
            "habit": habit_to_json(habit, tracker.clock()),
        })

    @app.route("/api/habits/<int:habit_id>", methods=["PUT"])
    def rename_habit(habit_id):
        data = request.get_json(silent=True) or {}
        habit = tracker.rename_habit(habit_id, data.get("name") or "")
        return jsonify({"success": True, "habit": habit_to_json(habit, tracker.clock())})

    @app.route("/api/habits/position/<int:position>", methods=["DELETE"])
    def delete_habit(position):
        habit = tracker.delete_habit(position)
        logger.info("Deleted habit %s via API", habit.id)
        return jsonify({"success": True, "deletedId": habit.id})

    @app.route("/api/stats", methods=["GET"])
    def stats():
        stats = tracker.collection.refresh_stats(tracker.clock())
        return jsonify({
            "totalHabits": stats.total_habits,
            "completedThisWeek": stats.completed_this_week,
            "pendingThisWeek": stats.pending_this_week,
            "overallProgress": stats.overall_progress_percentage(),
        })

    @app.route("/api/profile", methods=["GET"])
    def profile():
        p = tracker.collection.profile
        data = p.to_dict()
        data["daysJoined"] = p.days_joined(tracker.clock())
        return jsonify(data)

    return app
