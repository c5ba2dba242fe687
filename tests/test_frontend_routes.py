"""
End-to-end tests for the HTML routes in api/routes/frontend.py:
    GET  /                       records grid with search
    POST /records...             grid form handlers (303 back to the grid)
    GET  /analytics              filters + three SVG charts
"""


class TestGrid:
    def test_admin_sees_editing_controls(self, admin_client):
        resp = admin_client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert "Job records" in resp.text
        assert "Add job" in resp.text
        assert 'action="/records/1/edit"' in resp.text
        assert 'action="/records/1/delete"' in resp.text

    def test_read_only_sees_plain_grid(self, viewer_client):
        resp = viewer_client.get("/")
        assert resp.status_code == 200
        assert "(read only)" in resp.text
        assert "Add job" not in resp.text
        assert "/edit" not in resp.text
        assert "room, office" in resp.text

    def test_row_highlight_classes(self, viewer_client):
        html = viewer_client.get("/").text
        assert 'id="row-1" class="row-green"' in html
        assert 'id="row-2" class="row-yellow"' in html
        assert 'id="row-3" class=""' in html

    def test_profit_column(self, viewer_client):
        html = viewer_client.get("/").text
        assert "-50" in html
        assert "loss" in html

    def test_search(self, viewer_client):
        html = viewer_client.get("/", params={"q": "krakow"}).text
        assert "Showing 2 of 5 records" in html

    def test_search_field_selection_kept(self, viewer_client):
        html = viewer_client.get("/", params=[("q", "300"), ("field", "income")]).text
        assert "Showing 1 of 5 records" in html
        assert 'value="income" checked' in html

    def test_unknown_field_falls_back_to_defaults(self, viewer_client):
        resp = viewer_client.get("/", params={"q": "warsaw", "field": "salary"})
        assert resp.status_code == 200
        assert "Showing 2 of 5 records" in resp.text

    def test_no_match(self, viewer_client):
        assert "No records match." in viewer_client.get("/", params={"q": "zzz"}).text

    def test_export_link_carries_search(self, viewer_client):
        html = viewer_client.get("/", params=[("q", "krakow"), ("field", "place")]).text
        assert 'href="/api/v1/records/export?q=krakow&amp;field=place"' in html

    def test_export_link_drops_unknown_fields(self, viewer_client):
        html = viewer_client.get("/", params={"field": "salary"}).text
        assert ('href="/api/v1/records/export?q=&amp;field=name&amp;field=place'
                '&amp;field=service_type&amp;field=notes"') in html


class TestGridForms:
    def test_add(self, app, admin_client):
        resp = admin_client.post("/records", data={"back": "/?q=anna"})
        assert resp.status_code == 303
        assert resp.headers["location"] == "/?q=anna"
        assert app.state.store.get(6).status == "Pending"

    def test_add_read_only_forbidden(self, app, viewer_client):
        assert viewer_client.post("/records", data={"back": "/"}).status_code == 403
        assert len(app.state.store) == 5

    def test_edit_applies_changed_cells(self, app, admin_client):
        resp = admin_client.post("/records/2/edit", data={
            "name": "Piotr N.", "income": "75", "place": "Krakow", "back": "/",
        })
        assert resp.status_code == 303
        record = app.state.store.get(2)
        assert record.name == "Piotr N."
        assert record.income == 75.0
        assert app.state.store.version == 2

    def test_edit_unchanged_form_is_a_no_op(self, app, admin_client):
        admin_client.post("/records/2/edit", data={
            "name": "Piotr", "income": "50", "cost": "10", "notes": "", "back": "/",
        })
        assert app.state.store.version == 0

    def test_edit_blank_number_clears(self, app, admin_client):
        admin_client.post("/records/1/edit", data={"hours": "", "back": "/"})
        assert app.state.store.get(1).hours is None

    def test_edit_missing_record(self, admin_client):
        assert admin_client.post("/records/99/edit", data={"name": "x"}).status_code == 404

    def test_edit_read_only_forbidden(self, app, viewer_client):
        resp = viewer_client.post("/records/2/edit", data={"name": "x"})
        assert resp.status_code == 403
        assert "text/html" in resp.headers["content-type"]
        assert "Read-only access" in resp.text
        assert app.state.store.get(2).name == "Piotr"

    def test_confirms(self, app, admin_client):
        resp = admin_client.post("/records/3/confirms",
                                 data={"confirms": ["room", "office"], "back": "/"})
        assert resp.status_code == 303
        assert app.state.store.get(3).row_class == "row-green"

    def test_confirms_unticked_clears(self, app, admin_client):
        admin_client.post("/records/1/confirms", data={"back": "/"})
        assert app.state.store.get(1).confirms == []

    def test_delete(self, app, admin_client):
        resp = admin_client.post("/records/5/delete", data={"back": "/"})
        assert resp.status_code == 303
        assert [r.id for r in app.state.store.list()] == [1, 2, 3, 4]

    def test_offsite_back_ignored(self, admin_client):
        resp = admin_client.post("/records", data={"back": "https://evil.example/"})
        assert resp.headers["location"] == "/"


class TestAnalyticsPage:
    def test_renders_three_charts(self, viewer_client):
        resp = viewer_client.get("/analytics")
        assert resp.status_code == 200
        html = resp.text
        assert "Revenue by date" in html
        assert "Profit by service type" in html
        assert "Income distribution by name" in html
        assert html.count("<svg") == 3
        assert "5 records in view" in html

    def test_legend(self, viewer_client):
        html = viewer_client.get("/analytics").text
        assert "Anna: 120" in html
        assert "(24.0%)" in html

    def test_filter_applied_and_kept(self, viewer_client):
        html = viewer_client.get("/analytics", params={
            "service": "A", "from_date": "2024-01-01", "to_date": "2024-01-31",
        }).text
        assert "2 records in view" in html
        assert '<option value="A" selected>' in html
        assert 'name="from_date" value="2024-01-01"' in html

    def test_single_record(self, viewer_client):
        html = viewer_client.get("/analytics", params={"service": "B"}).text
        assert "1 record in view" in html

    def test_empty_selection(self, viewer_client):
        html = viewer_client.get("/analytics", params={"from_date": "2031-01-01"}).text
        assert "0 records in view" in html
        assert "No income in view." in html

    def test_reset_link(self, viewer_client):
        assert 'href="/analytics">Reset' in viewer_client.get("/analytics").text


class TestErrorPages:
    def test_unknown_page_renders_html_404(self, viewer_client):
        resp = viewer_client.get("/no-such-page")
        assert resp.status_code == 404
        assert "Page not found" in resp.text

    def test_unknown_api_path_stays_json(self, viewer_client):
        resp = viewer_client.get("/api/v1/nope")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Not Found"}

    def test_read_only_post_renders_html_403(self, viewer_client):
        resp = viewer_client.post("/records/5/delete", data={"back": "/"})
        assert resp.status_code == 403
        assert "text/html" in resp.headers["content-type"]
        assert "Read-only access" in resp.text
        assert "viewer" in resp.text

    def test_read_only_api_call_stays_json(self, viewer_client):
        resp = viewer_client.delete("/api/v1/records/5")
        assert resp.status_code == 403
        assert resp.json()["error"] == "Forbidden"
