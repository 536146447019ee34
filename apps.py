from flask import Flask, render_template, request, redirect, url_for, session, flash, abort, send_file
import os, io

from edit_session import EditSession
from search import visible_rows, is_scrollable
from storage import FileSlotStore
from student_manager import StudentManager, submit
from validation import FIELDS, build_record

app = Flask(__name__)
app.secret_key = os.environ.get("SRS_SECRET_KEY", "dev-secret-change-me")
app.config['STORAGE_DIR'] = os.environ.get("SRS_STORAGE_DIR", "data")

# ----------------- STUDENT MANAGEMENT -----------------
student_manager = StudentManager(FileSlotStore(app.config['STORAGE_DIR']))


def current_edit_session():
    return EditSession(session.get("edit_position"))


def save_edit_session(edit_session):
    if edit_session.is_editing:
        session["edit_position"] = edit_session.position
    else:
        session.pop("edit_position", None)


def render_students(form=None, errors=None, status=200):
    """Render the register form and the (filtered) student table."""
    search = request.args.get("q", "")
    students = student_manager.all_students()
    edit_session = current_edit_session()
    if edit_session.is_editing and edit_session.position >= len(students):
        # the stored position no longer names a record
        edit_session.reset()
        save_edit_session(edit_session)
    if form is None:
        form = edit_session.begin_edit(edit_session.position, students) if edit_session.is_editing else {}
    rows = visible_rows(students, search)
    return render_template("students.html",
                           rows=rows,
                           visible_count=len(rows),
                           scrollable=is_scrollable(len(rows)),
                           search=search,
                           form={f: form.get(f, "") for f in FIELDS},
                           errors=errors or {},
                           editing=edit_session.is_editing), status

# ----------------- ROUTES -----------------

@app.route("/")
def index():
    return redirect(url_for("students"))

@app.route("/students", methods=["GET", "POST"])
def students():
    if request.method == "POST":
        candidate = build_record(request.form)
        edit_session = current_edit_session()
        was_editing = edit_session.is_editing
        try:
            result = submit(student_manager, edit_session, candidate)
        except IndexError:
            # edited record vanished since the form was opened
            app.logger.warning("Edit position %s is stale, resetting form", edit_session.position)
            edit_session.reset()
            save_edit_session(edit_session)
            flash("That record no longer exists.", "error")
            return redirect(url_for("students"))
        if not result.ok:
            flash("Please correct the errors in the form.", "error")
            return render_students(form=candidate, errors=result.messages(), status=400)
        save_edit_session(edit_session)
        flash(f"{'Updated' if was_editing else 'Added'} {candidate['name']}", "success")
        return redirect(url_for("students", q=request.args.get("q") or None))
    return render_students()

@app.route("/edit/<int:position>")
def edit_student(position):
    edit_session = current_edit_session()
    try:
        draft = edit_session.begin_edit(position, student_manager.students)
    except IndexError:
        abort(404)
    save_edit_session(edit_session)
    flash(f"Editing {draft['name']}", "info")
    return redirect(url_for("students"))

@app.route("/delete/<int:position>", methods=["POST"])
def delete_student(position):
    try:
        removed = student_manager.remove_at(position)
    except IndexError:
        abort(404)
    edit_session = current_edit_session()
    edit_session.record_removed(position)
    save_edit_session(edit_session)
    flash(f"Deleted {removed['name']}", "success")
    return redirect(url_for("students", q=request.args.get("q") or None))

@app.route("/reset", methods=["POST"])
def reset_form():
    edit_session = current_edit_session()
    edit_session.reset()
    save_edit_session(edit_session)
    flash("Form reset", "info")
    return redirect(url_for("students"))

@app.route("/clear", methods=["POST"])
def clear_all():
    if not len(student_manager):
        return redirect(url_for("students"))
    student_manager.clear_all()
    edit_session = current_edit_session()
    edit_session.reset()
    save_edit_session(edit_session)
    flash("All records cleared", "success")
    return redirect(url_for("students"))

@app.route("/export")
def export_students():
    buf = io.BytesIO()
    student_manager.export_to_excel(buf)
    buf.seek(0)
    return send_file(buf,
                     mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                     as_attachment=True,
                     download_name="students.xlsx")

# ----------------- ERROR HANDLERS -----------------
@app.errorhandler(404)
def page_not_found(e):
    return render_template("error.html", error_message="Page not found"), 404

@app.errorhandler(500)
def internal_error(e):
    return render_template("error.html", error_message="Internal server error"), 500

if __name__=="__main__":
    app.run(debug=True, use_debugger=True, use_reloader=True)
