from timetable_tracker.main import create_app

app = create_app()

if __name__ == "__main__":
    # One request at a time: state edits and reminder ticks share a single writer.
    app.run(debug=app.config["DEBUG"], use_reloader=False, threaded=False)
