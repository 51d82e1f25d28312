from dash import html, dcc
import dash_bootstrap_components as dbc

def welcome_layout():
    return dbc.Container(
        [
            dbc.Row(
                dbc.Col(
                    [
                        html.H1("Welcome to Centre User Insights", className="display-4 mb-3"),
                        html.P(
                            "Track training progress for every user across your centres.",
                            className="lead mb-4"
                        ),
                        html.Hr(),
                        dcc.Link(
                            dbc.Button("Open Centre Users", color="primary"),
                            href="/centre-users"
                        ),
                    ],
                    width=12,
                    className="text-center mt-5"
                )
            )
        ],
        fluid=True,
        className="py-5"
    )
